from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class WorkflowLogModel(BaseModel):
    """A log record written by an agent while running an execution."""

    id: int
    tenant_id: str
    workflow_id: str
    workflow_run_id: str
    workflow_type: Optional[str] = None
    agent: Optional[str] = None
    participant_id: Optional[str] = None
    level: str
    message: str
    properties: Optional[Dict[str, Any]] = None
    exception: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WorkflowLogCreateModel(BaseModel):
    tenant_id: str
    workflow_id: str
    workflow_run_id: str
    workflow_type: Optional[str] = None
    agent: Optional[str] = None
    participant_id: Optional[str] = None
    level: str = "Information"
    message: str
    properties: Optional[Dict[str, Any]] = None
    exception: Optional[str] = None
    created_at: Optional[datetime] = None
