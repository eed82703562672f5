from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from .models import HistoryEvent, TaskQueuePoller, WorkflowExecutionInfo
from .predicates import Predicate


class WorkflowBackendInterface(ABC):
    """Read-only view of the durable workflow orchestration backend.

    Implementations raise ``NotFoundError`` for unknown executions and
    ``RemoteBackendError`` for every other remote failure, timeouts included.
    """

    @abstractmethod
    async def describe(
        self, execution_id: str, run_id: Optional[str] = None
    ) -> WorkflowExecutionInfo:
        """Describe one execution; the latest run when no run id is given."""
        pass

    @abstractmethod
    async def fetch_history(
        self, execution_id: str, run_id: Optional[str] = None
    ) -> List[HistoryEvent]:
        """Fetch the full event history of one run in event order."""
        pass

    @abstractmethod
    def list_executions(
        self, predicate: Predicate, limit: int
    ) -> AsyncIterator[WorkflowExecutionInfo]:
        """Stream executions matching the predicate, at most ``limit`` of them.

        The stream is forward-only and uncounted.
        """
        pass

    @abstractmethod
    async def describe_task_queue(self, task_queue: str) -> List[TaskQueuePoller]:
        """List the pollers the backend has seen on a workflow task queue."""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        """Return True when the backend answers health checks."""
        pass
