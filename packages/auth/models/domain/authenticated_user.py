from typing import List

from pydantic import BaseModel, ConfigDict, Field

from common.core.constants import SystemRole


class AuthenticatedUser(BaseModel):
    """User context passed through authentication dependencies"""

    user_id: str
    tenant_id: str
    roles: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_sys_admin(self) -> bool:
        return SystemRole.SYS_ADMIN.value in self.roles

    @property
    def is_tenant_admin(self) -> bool:
        return SystemRole.TENANT_ADMIN.value in self.roles

    @property
    def sees_all_tenant_agents(self) -> bool:
        return self.is_sys_admin or self.is_tenant_admin
