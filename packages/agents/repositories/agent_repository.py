from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.agents.models.database.agent import AgentEntity, AgentPermissionEntity
from packages.agents.models.domain.agent import AgentCreateModel, AgentModel

logger = get_logger(__name__)


class AgentRepository(BaseRepository[AgentEntity, AgentModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(AgentEntity, AgentModel, db_session)

    @trace_span
    async def create(self, agent: AgentCreateModel) -> AgentModel:
        entity = self.entity_class(
            tenant_id=agent.tenant_id,
            name=agent.name,
            description=agent.description,
            permissions=[
                AgentPermissionEntity(user_id=p.user_id, level=p.level.value)
                for p in agent.permissions
            ],
        )
        async with self._get_session() as session:
            session.add(entity)
            await session.flush()
            await session.refresh(entity, attribute_names=["created_at"])
            return self._entity_to_domain(entity)

    @trace_span
    async def get_by_name(self, tenant_id: str, name: str) -> Optional[AgentModel]:
        query = self._add_tenant_filter(
            select(self.entity_class).where(self.entity_class.name == name), tenant_id
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def list_by_names(self, tenant_id: str, names: List[str]) -> List[AgentModel]:
        if not names:
            return []
        query = self._add_tenant_filter(
            select(self.entity_class).where(self.entity_class.name.in_(names)),
            tenant_id,
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(list(result.scalars().all()))

    @trace_span
    async def list_names_by_tenant(self, tenant_id: str) -> List[str]:
        query = self._add_tenant_filter(
            select(self.entity_class.name), tenant_id
        ).order_by(self.entity_class.name)
        async with self._get_session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    @trace_span
    async def list_names_accessible_by_user(
        self, tenant_id: str, user_id: str
    ) -> List[str]:
        """Names of tenant agents the user holds any access level on."""
        query = (
            select(self.entity_class.name)
            .join(
                AgentPermissionEntity,
                AgentPermissionEntity.agent_id == self.entity_class.id,
            )
            .where(
                self.entity_class.tenant_id == tenant_id,
                AgentPermissionEntity.user_id == user_id,
            )
            .distinct()
            .order_by(self.entity_class.name)
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())
