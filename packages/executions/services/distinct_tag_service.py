from typing import List, Optional

from common.core.config import settings
from common.core.constants import ExecutionMemoKey
from common.core.otel_axiom_exporter import get_logger, trace_span
from common.providers.caching import cache
from common.providers.orchestration import WorkflowBackendInterface
from packages.agents.services.agent_visibility_service import AgentVisibilityService
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.executions.models.domain.query import QueryCriteria
from packages.executions.services.cache_keys import distinct_tag_values_key
from packages.executions.utils.query_builder import build_predicate

logger = get_logger(__name__)


class DistinctTagService:
    """Distinct activation tags (``idPostfix``) for filter dropdowns.

    Scans at most ``settings.distinct_tag_scan_limit`` visible executions and
    caches the sorted result per tenant and user until it expires.
    Concurrent misses may both scan.
    """

    def __init__(
        self,
        backend: WorkflowBackendInterface,
        visibility_service: Optional[AgentVisibilityService] = None,
    ):
        self.backend = backend
        self.visibility_service = visibility_service or AgentVisibilityService()

    @cache(
        list,
        ttl=settings.distinct_tag_cache_ttl_seconds,
        key_generator=distinct_tag_values_key,
    )
    @trace_span
    async def get_distinct_tag_values(self, user: AuthenticatedUser) -> List[str]:
        agents = await self.visibility_service.list_readable_agents(user)
        if not agents:
            return []

        predicate = build_predicate(
            QueryCriteria(tenant_id=user.tenant_id, agent_names=agents)
        )
        tags = set()
        scanned = 0
        async for execution in self.backend.list_executions(
            predicate, settings.distinct_tag_scan_limit
        ):
            scanned += 1
            tag = execution.memo.get(ExecutionMemoKey.ID_POSTFIX.value)
            if tag:
                tags.add(tag)

        logger.info(
            f"Scanned {scanned} executions for distinct tags in tenant {user.tenant_id}: {len(tags)} found"
        )
        return sorted(tags)
