from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PermissionLevel(str, Enum):
    OWNER = "owner"
    WRITE = "write"
    READ = "read"


class AgentPermissionModel(BaseModel):
    user_id: str
    level: PermissionLevel

    model_config = ConfigDict(from_attributes=True)


class AgentModel(BaseModel):
    """A tenant-scoped agent and the users granted access to it."""

    id: Optional[int] = None
    tenant_id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    permissions: List[AgentPermissionModel] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    def has_read_permission(self, user_id: str) -> bool:
        """Owner and write access imply read access."""
        return any(p.user_id == user_id for p in self.permissions)

    @classmethod
    def placeholder(cls, tenant_id: str, name: str) -> "AgentModel":
        """Stand-in for an agent that still has executions but no record."""
        return cls(tenant_id=tenant_id, name=name)


class AgentCreateModel(BaseModel):
    tenant_id: str
    name: str
    description: Optional[str] = None
    permissions: List[AgentPermissionModel] = Field(default_factory=list)
