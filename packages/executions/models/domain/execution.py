from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from common.core.constants import NOT_AVAILABLE
from packages.agents.models.domain.agent import AgentModel
from packages.logs.models.domain.workflow_log import WorkflowLogModel


class CurrentActivity(BaseModel):
    """The activity an execution is currently waiting on."""

    activity_type: str
    activity_id: str


class ExecutionProjection(BaseModel):
    """Read-only view of one agent execution, assembled per query."""

    execution_id: str
    run_id: str
    workflow_type: str
    tenant_id: Optional[str] = None
    owner: Optional[str] = None
    agent: Optional[str] = None
    id_postfix: Optional[str] = None
    status: Optional[str] = None
    task_queue: str = NOT_AVAILABLE
    worker_count: str = NOT_AVAILABLE
    start_time: Optional[datetime] = None
    execution_time: Optional[datetime] = None
    close_time: Optional[datetime] = None
    parent_id: Optional[str] = None
    parent_run_id: Optional[str] = None
    history_length: int = 0
    current_activity: Optional[CurrentActivity] = None
    last_log: Optional[WorkflowLogModel] = None


class AgentExecutions(BaseModel):
    """Executions of one agent, for the grouped listing."""

    agent: AgentModel
    executions: List[ExecutionProjection] = Field(default_factory=list)
