from typing import List, Optional

from common.core.exceptions import PermissionDeniedError
from common.core.otel_axiom_exporter import get_logger, trace_span
from packages.agents.repositories.agent_repository import AgentRepository
from packages.auth.models.domain.authenticated_user import AuthenticatedUser

logger = get_logger(__name__)


class AgentVisibilityService:
    """Decides which agents' executions a caller may read.

    Admin roles read every agent of their tenant. Everyone else reads the
    agents they hold owner, write or read access on.
    """

    def __init__(self, agent_repository: Optional[AgentRepository] = None):
        self.agent_repository = agent_repository or AgentRepository()

    @trace_span
    async def has_read_permission(
        self, agent_name: str, user: AuthenticatedUser
    ) -> bool:
        agent = await self.agent_repository.get_by_name(user.tenant_id, agent_name)
        if agent is None:
            return False
        if user.sees_all_tenant_agents:
            return True
        return agent.has_read_permission(user.user_id)

    @trace_span
    async def list_readable_agents(self, user: AuthenticatedUser) -> List[str]:
        if user.sees_all_tenant_agents:
            return await self.agent_repository.list_names_by_tenant(user.tenant_id)
        return await self.agent_repository.list_names_accessible_by_user(
            user.tenant_id, user.user_id
        )

    @trace_span
    async def resolve_visible_agents(
        self, user: AuthenticatedUser, agent_name: Optional[str] = None
    ) -> List[str]:
        """Agents to constrain a query to.

        With an agent name, the caller must be able to read it and it is the
        only agent returned. Without one, every readable agent is returned;
        an empty list means the caller can see nothing.

        Raises:
            PermissionDeniedError: If the caller cannot read the named agent
        """
        if agent_name:
            if not await self.has_read_permission(agent_name, user):
                logger.info(
                    f"User {user.user_id} denied read on agent {agent_name} in tenant {user.tenant_id}"
                )
                raise PermissionDeniedError(
                    "You do not have read permission to this agent"
                )
            return [agent_name]

        return await self.list_readable_agents(user)
