from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class CurrentActivityResponse(_CamelModel):
    activity_type: str
    activity_id: str


class LastLogResponse(_CamelModel):
    level: str
    message: str
    participant_id: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None
    exception: Optional[str] = None
    created_at: datetime


class ExecutionResponse(_CamelModel):
    """Response model for an agent execution"""

    agent: Optional[str] = None
    tenant_id: Optional[str] = None
    owner: Optional[str] = None
    execution_id: str = Field(serialization_alias="workflowId")
    run_id: str
    workflow_type: str
    status: Optional[str] = None
    worker_count: str = Field(serialization_alias="numOfWorkers")
    task_queue: str
    id_postfix: Optional[str] = None
    start_time: Optional[datetime] = None
    execution_time: Optional[datetime] = None
    close_time: Optional[datetime] = None
    parent_id: Optional[str] = None
    parent_run_id: Optional[str] = None
    history_length: int = 0
    current_activity: Optional[CurrentActivityResponse] = None
    last_log: Optional[LastLogResponse] = None


class PaginatedExecutionsResponse(_CamelModel):
    workflows: List[ExecutionResponse] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    page_size: int
    has_next_page: bool = False
    total_count: Optional[int] = None


class AgentSummaryResponse(_CamelModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None


class AgentExecutionsResponse(_CamelModel):
    agent: AgentSummaryResponse
    workflows: List[ExecutionResponse] = Field(
        default_factory=list, validation_alias="executions"
    )
