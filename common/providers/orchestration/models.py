from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class WorkflowExecutionInfo(BaseModel):
    """An execution as reported by describe or list calls."""

    execution_id: str
    run_id: str
    workflow_type: str
    status: Optional[str] = None
    task_queue: Optional[str] = None
    history_length: int = 0
    start_time: Optional[datetime] = None
    execution_time: Optional[datetime] = None
    close_time: Optional[datetime] = None
    parent_id: Optional[str] = None
    parent_run_id: Optional[str] = None
    memo: Dict[str, str] = Field(default_factory=dict)


class HistoryEventKind(str, Enum):
    ACTIVITY_SCHEDULED = "activity_scheduled"
    ACTIVITY_STARTED = "activity_started"
    ACTIVITY_COMPLETED = "activity_completed"
    ACTIVITY_FAILED = "activity_failed"
    ACTIVITY_TIMED_OUT = "activity_timed_out"
    ACTIVITY_CANCELED = "activity_canceled"
    WORKFLOW_COMPLETED = "workflow_completed"
    OTHER = "other"


_ACTIVITY_END_KINDS = frozenset(
    {
        HistoryEventKind.ACTIVITY_STARTED,
        HistoryEventKind.ACTIVITY_COMPLETED,
        HistoryEventKind.ACTIVITY_FAILED,
        HistoryEventKind.ACTIVITY_TIMED_OUT,
        HistoryEventKind.ACTIVITY_CANCELED,
    }
)


class HistoryEvent(BaseModel):
    """One entry of an execution's append-only history.

    Activity end events reference the scheduled event they resolve through
    ``scheduled_event_id``.
    """

    event_id: int
    kind: HistoryEventKind
    scheduled_event_id: Optional[int] = None
    activity_type: Optional[str] = None
    activity_id: Optional[str] = None

    @property
    def is_begin(self) -> bool:
        return self.kind == HistoryEventKind.ACTIVITY_SCHEDULED

    @property
    def is_end(self) -> bool:
        return self.kind in _ACTIVITY_END_KINDS

    @property
    def correlation_id(self) -> Optional[int]:
        return self.scheduled_event_id

    @property
    def is_barrier(self) -> bool:
        return self.kind == HistoryEventKind.WORKFLOW_COMPLETED


class TaskQueuePoller(BaseModel):
    """A worker currently or recently polling a task queue."""

    identity: str
    last_access_time: Optional[datetime] = None
