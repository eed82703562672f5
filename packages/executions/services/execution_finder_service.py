import asyncio
from typing import Dict, List, Optional

from common.core.config import settings
from common.core.constants import ExecutionMemoKey, ExecutionStatus, NOT_AVAILABLE
from common.core.exceptions import NotFoundError, ValidationError
from common.core.otel_axiom_exporter import get_logger, trace_span
from common.providers.orchestration import (
    WorkflowBackendInterface,
    WorkflowExecutionInfo,
)
from packages.agents.models.domain.agent import AgentModel
from packages.agents.repositories.agent_repository import AgentRepository
from packages.agents.services.agent_visibility_service import AgentVisibilityService
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.executions.models.domain.execution import (
    AgentExecutions,
    ExecutionProjection,
)
from packages.executions.models.domain.page import PageRequest, PageResult
from packages.executions.models.domain.query import QueryCriteria
from packages.executions.paginators.interface import PaginatorInterface
from packages.executions.paginators.over_fetch_paginator import OverFetchPaginator
from packages.executions.projections.activity_projector import (
    project_current_activity,
)
from packages.executions.services.worker_liveness_service import (
    WorkerLivenessService,
)
from packages.executions.utils.query_builder import build_predicate
from packages.logs.services.log_correlation_service import LogCorrelationService

logger = get_logger(__name__)


def to_projection(info: WorkflowExecutionInfo) -> ExecutionProjection:
    """Project a described or listed execution, without activity or workers."""
    return ExecutionProjection(
        execution_id=info.execution_id,
        run_id=info.run_id,
        workflow_type=info.workflow_type,
        tenant_id=info.memo.get(ExecutionMemoKey.TENANT_ID.value),
        owner=info.memo.get(ExecutionMemoKey.USER_ID.value),
        agent=info.memo.get(ExecutionMemoKey.AGENT.value),
        id_postfix=info.memo.get(ExecutionMemoKey.ID_POSTFIX.value),
        status=info.status,
        task_queue=info.task_queue or NOT_AVAILABLE,
        start_time=info.start_time,
        execution_time=info.execution_time,
        close_time=info.close_time,
        parent_id=info.parent_id,
        parent_run_id=info.parent_run_id,
        history_length=info.history_length,
    )


class ExecutionFinderService:
    """Answers which agent executions exist, what they are doing and who may see them."""

    def __init__(
        self,
        backend: WorkflowBackendInterface,
        visibility_service: Optional[AgentVisibilityService] = None,
        liveness_service: Optional[WorkerLivenessService] = None,
        log_correlation_service: Optional[LogCorrelationService] = None,
        agent_repository: Optional[AgentRepository] = None,
        paginator: Optional[PaginatorInterface] = None,
    ):
        self.backend = backend
        self.visibility_service = visibility_service or AgentVisibilityService()
        self.liveness_service = liveness_service or WorkerLivenessService(backend)
        self.log_correlation_service = (
            log_correlation_service or LogCorrelationService()
        )
        self.agent_repository = agent_repository or AgentRepository()
        self.paginator = paginator or OverFetchPaginator()

    @trace_span
    async def get_execution(
        self,
        execution_id: str,
        user: AuthenticatedUser,
        run_id: Optional[str] = None,
    ) -> ExecutionProjection:
        """Describe one execution with its current activity and live worker count.

        Raises:
            ValidationError: If the execution id is blank
            NotFoundError: If the execution does not exist in the caller's tenant
            PermissionDeniedError: If the caller cannot read the execution's agent
            RemoteBackendError: If the orchestration backend fails
        """
        if not execution_id or not execution_id.strip():
            raise ValidationError("Execution id is required")

        info = await self.backend.describe(execution_id, run_id or None)

        if info.memo.get(ExecutionMemoKey.TENANT_ID.value) != user.tenant_id:
            logger.info(
                f"Execution {execution_id} is not in tenant {user.tenant_id}"
            )
            raise NotFoundError(f"Execution {execution_id} not found")

        agent = info.memo.get(ExecutionMemoKey.AGENT.value)
        if not agent:
            logger.warning(f"Execution {execution_id} has no agent memo")
            raise NotFoundError(f"Agent not found for execution {execution_id}")

        await self.visibility_service.resolve_visible_agents(user, agent)

        history, workers = await asyncio.gather(
            self.backend.fetch_history(info.execution_id, info.run_id),
            self.liveness_service.count_active_workers(info.task_queue),
        )

        projection = to_projection(info)
        projection.current_activity = project_current_activity(history)
        projection.worker_count = workers.value

        await self.log_correlation_service.attach_last_logs(
            user.tenant_id, [projection]
        )
        return projection

    @trace_span
    async def list_executions(
        self,
        user: AuthenticatedUser,
        agent_name: Optional[str] = None,
        status: Optional[str] = None,
        workflow_type: Optional[str] = None,
        owner: Optional[str] = None,
        id_postfix: Optional[str] = None,
        page_token: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> PageResult[ExecutionProjection]:
        """One page of the executions visible to the caller, newest first.

        Raises:
            PermissionDeniedError: If ``agent_name`` is given and not readable
            RemoteBackendError: If the orchestration backend fails
        """
        request = PageRequest.from_token(page_token, page_size)

        agents = await self.visibility_service.resolve_visible_agents(
            user, agent_name
        )
        if not agents:
            logger.info(f"User {user.user_id} cannot read any agent; empty page")
            return PageResult(page_size=request.page_size)

        predicate = build_predicate(
            QueryCriteria(
                tenant_id=user.tenant_id,
                agent_names=agents,
                status=status,
                workflow_type=workflow_type,
                owner=owner,
                id_postfix=id_postfix,
            )
        )

        page = await self.paginator.paginate(
            lambda skip, limit: self.backend.list_executions(predicate, limit),
            request,
        )
        projections = [to_projection(info) for info in page.items]
        await self.log_correlation_service.attach_last_logs(
            user.tenant_id, projections
        )

        return PageResult(
            items=projections,
            next_page_token=page.next_page_token,
            page_size=page.page_size,
        )

    async def _scan(
        self, criteria: QueryCriteria, user: AuthenticatedUser
    ) -> List[ExecutionProjection]:
        predicate = build_predicate(criteria)
        projections = [
            to_projection(info)
            async for info in self.backend.list_executions(
                predicate, settings.execution_scan_limit
            )
        ]
        if len(projections) >= settings.execution_scan_limit:
            logger.warning(
                f"Execution scan for tenant {user.tenant_id} hit the limit of {settings.execution_scan_limit}"
            )
        return projections

    @trace_span
    async def list_running_executions(
        self,
        user: AuthenticatedUser,
        agent_name: Optional[str] = None,
        workflow_type: Optional[str] = None,
    ) -> List[ExecutionProjection]:
        """All running executions, optionally narrowed to one agent and type."""
        agents = await self.visibility_service.resolve_visible_agents(
            user, agent_name
        )
        if not agents:
            return []

        return await self._scan(
            QueryCriteria(
                tenant_id=user.tenant_id,
                agent_names=agents,
                status=ExecutionStatus.RUNNING.value,
                workflow_type=workflow_type,
            ),
            user,
        )

    @trace_span
    async def list_executions_by_agent(
        self, user: AuthenticatedUser, status: Optional[str] = None
    ) -> List[AgentExecutions]:
        """Visible executions grouped by agent, in agent name order."""
        agents = await self.visibility_service.resolve_visible_agents(user)
        if not agents:
            return []

        projections = await self._scan(
            QueryCriteria(tenant_id=user.tenant_id, agent_names=agents, status=status),
            user,
        )
        await self.log_correlation_service.attach_last_logs(
            user.tenant_id, projections
        )

        grouped: Dict[str, List[ExecutionProjection]] = {}
        for projection in projections:
            grouped.setdefault(projection.agent or "", []).append(projection)

        records = {
            agent.name: agent
            for agent in await self.agent_repository.list_by_names(
                user.tenant_id, list(grouped)
            )
        }

        result: List[AgentExecutions] = []
        for name in sorted(grouped):
            agent: AgentModel = records.get(name) or AgentModel.placeholder(
                user.tenant_id, name
            )
            result.append(AgentExecutions(agent=agent, executions=grouped[name]))
        return result
