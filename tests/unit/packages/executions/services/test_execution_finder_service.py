import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from common.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    RemoteBackendError,
    ValidationError,
)
from common.providers.orchestration import TaskQueuePoller
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.executions.services.execution_finder_service import (
    ExecutionFinderService,
)
from packages.logs.models.domain.workflow_log import WorkflowLogCreateModel
from packages.logs.repositories.workflow_log_repository import WorkflowLogRepository
from packages.logs.services.log_correlation_service import LogCorrelationService
from tests.fixtures import TENANT_A, TENANT_B
from tests.fixtures.workflow_backend import (
    FakeWorkflowBackend,
    make_execution,
    resolved,
    scheduled,
)


@pytest.fixture
def backend():
    recent = datetime.now(timezone.utc) - timedelta(seconds=10)
    return FakeWorkflowBackend(
        executions=[make_execution(f"wf-{i}") for i in range(5)]
        + [
            make_execution("wf-other-agent", agent="agent-2"),
            make_execution("wf-foreign", tenant_id=TENANT_B, agent="agent-3"),
            make_execution("wf-no-agent", agent=None),
        ],
        histories={"wf-0": [scheduled(1, "Fetch"), resolved(2, 1), scheduled(3, "Summarize")]},
        pollers={"agent-1": [TaskQueuePoller(identity="w1", last_access_time=recent)]},
    )


@pytest.fixture
def finder(backend):
    return ExecutionFinderService(backend)


class TestGetExecution:
    async def test_projects_activity_and_workers(self, finder, sample_agents, test_user):
        execution = await finder.get_execution("wf-0", test_user)

        assert execution.execution_id == "wf-0"
        assert execution.agent == "agent-1"
        assert execution.owner == "user-1"
        assert execution.tenant_id == TENANT_A
        assert execution.current_activity.activity_type == "Summarize"
        assert execution.current_activity.activity_id == "3"
        assert execution.worker_count == "1"
        assert execution.last_log is None

    async def test_blank_id_is_rejected_before_any_remote_call(self, finder, backend, test_user):
        with pytest.raises(ValidationError):
            await finder.get_execution("  ", test_user)
        assert backend.describe_calls == 0

    async def test_liveness_failure_degrades_worker_count(
        self, finder, backend, sample_agents, test_user
    ):
        backend.task_queue_error = RemoteBackendError("timeout")

        execution = await finder.get_execution("wf-0", test_user)

        assert execution.worker_count == "N/A"
        assert execution.current_activity is not None

    async def test_unreadable_agent_is_forbidden(self, finder, sample_agents, test_user):
        with pytest.raises(PermissionDeniedError):
            await finder.get_execution("wf-other-agent", test_user)

    async def test_other_tenant_execution_is_not_found(self, finder, sample_agents, test_user):
        with pytest.raises(NotFoundError):
            await finder.get_execution("wf-foreign", test_user)

    async def test_execution_without_agent_is_not_found(self, finder, sample_agents, test_user):
        with pytest.raises(NotFoundError):
            await finder.get_execution("wf-no-agent", test_user)

    async def test_remote_failure_propagates(self, finder, backend, sample_agents, test_user):
        backend.describe_error = RemoteBackendError("Temporal describe failed")
        with pytest.raises(RemoteBackendError):
            await finder.get_execution("wf-0", test_user)

    async def test_attaches_last_log(self, finder, sample_agents, test_user):
        repo = WorkflowLogRepository()
        base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        for minute, message in enumerate(["started", "summarizing"]):
            await repo.create(
                WorkflowLogCreateModel(
                    tenant_id=TENANT_A,
                    workflow_id="wf-0",
                    workflow_run_id="wf-0-run",
                    message=message,
                    created_at=base + timedelta(minutes=minute),
                )
            )

        execution = await finder.get_execution("wf-0", test_user)

        assert execution.last_log.message == "summarizing"


class TestListExecutions:
    async def test_first_page(self, finder, backend, sample_agents, test_user):
        page = await finder.list_executions(test_user, page_size=2)

        assert [e.execution_id for e in page.items] == ["wf-0", "wf-1"]
        assert page.has_next_page
        assert page.next_page_token == "2"
        assert page.total_count is None
        assert backend.queries == ["tenantId = 'tenant-a' and agent = 'agent-1'"]

    async def test_invalid_page_size_falls_back_to_default(self, finder, sample_agents, test_user):
        page = await finder.list_executions(test_user, page_size=0)
        assert page.page_size == 20

    async def test_filters_are_forwarded(self, finder, backend, sample_agents, test_user):
        await finder.list_executions(
            test_user,
            agent_name="agent-1",
            status="running",
            workflow_type="Router",
            owner="user-1",
            id_postfix="nightly",
        )

        assert backend.queries == [
            "tenantId = 'tenant-a' and agent = 'agent-1' and ExecutionStatus = 'Running'"
            " and WorkflowType = 'Router' and userId = 'user-1' and idPostfix = 'nightly'"
        ]

    async def test_admin_sees_all_tenant_agents(self, finder, backend, sample_agents, tenant_admin):
        await finder.list_executions(tenant_admin)
        assert backend.queries == ["tenantId = 'tenant-a' and agent in ('agent-1','agent-2')"]

    async def test_no_readable_agents_is_empty_page(self, finder, backend, sample_agents):
        stranger = AuthenticatedUser(user_id="nobody", tenant_id=TENANT_A)

        page = await finder.list_executions(stranger)

        assert page.items == []
        assert not page.has_next_page
        assert backend.queries == []

    async def test_unreadable_agent_filter_is_forbidden(self, finder, backend, sample_agents, test_user):
        with pytest.raises(PermissionDeniedError):
            await finder.list_executions(test_user, agent_name="agent-2")
        assert backend.queries == []

    async def test_listing_has_no_activity_or_workers(self, finder, sample_agents, test_user):
        page = await finder.list_executions(test_user, page_size=1)
        assert page.items[0].current_activity is None
        assert page.items[0].worker_count == "N/A"

    async def test_log_store_failure_keeps_page(self, backend, sample_agents, test_user):
        log_repository = AsyncMock()
        log_repository.get_last_log_per_run = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )
        finder = ExecutionFinderService(
            backend, log_correlation_service=LogCorrelationService(log_repository)
        )

        page = await finder.list_executions(test_user, page_size=2)

        assert len(page.items) == 2
        assert all(e.last_log is None for e in page.items)

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connect call failed"),
            asyncio.TimeoutError(),
        ],
    )
    async def test_log_store_unreachable_keeps_page(
        self, backend, sample_agents, test_user, error
    ):
        log_repository = AsyncMock()
        log_repository.get_last_log_per_run = AsyncMock(side_effect=error)
        finder = ExecutionFinderService(
            backend, log_correlation_service=LogCorrelationService(log_repository)
        )

        page = await finder.list_executions(test_user, page_size=2)

        assert len(page.items) == 2
        assert all(e.last_log is None for e in page.items)


class TestListRunningExecutions:
    async def test_scans_running_executions(self, finder, backend, sample_agents, test_user):
        executions = await finder.list_running_executions(
            test_user, agent_name="agent-1", workflow_type="Router"
        )

        assert len(executions) == len(backend.executions)
        assert backend.queries == [
            "tenantId = 'tenant-a' and agent = 'agent-1' and ExecutionStatus = 'Running'"
            " and WorkflowType = 'Router'"
        ]

    async def test_no_readable_agents(self, finder, backend, sample_agents):
        stranger = AuthenticatedUser(user_id="nobody", tenant_id=TENANT_A)
        assert await finder.list_running_executions(stranger) == []
        assert backend.queries == []


class TestListExecutionsByAgent:
    async def test_groups_by_agent_with_placeholders(self, backend, sample_agents, tenant_admin):
        backend.executions = [
            make_execution("wf-1", agent="agent-1"),
            make_execution("wf-2", agent="agent-2"),
            make_execution("wf-3", agent="agent-1"),
            make_execution("wf-4", agent="retired-agent"),
        ]
        finder = ExecutionFinderService(backend)

        groups = await finder.list_executions_by_agent(tenant_admin, status="Running")

        assert [g.agent.name for g in groups] == ["agent-1", "agent-2", "retired-agent"]
        assert [e.execution_id for e in groups[0].executions] == ["wf-1", "wf-3"]
        assert groups[0].agent.id is not None
        assert groups[2].agent.id is None
        assert backend.queries == [
            "tenantId = 'tenant-a' and agent in ('agent-1','agent-2')"
            " and ExecutionStatus = 'Running'"
        ]
