from typing import List, Optional

from pydantic import BaseModel, Field


class QueryCriteria(BaseModel):
    """Filters for an execution listing. Only ``tenant_id`` is mandatory."""

    tenant_id: str
    agent_name: Optional[str] = None
    agent_names: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    workflow_type: Optional[str] = None
    owner: Optional[str] = None
    id_postfix: Optional[str] = None
