from datetime import datetime, timezone
from unittest.mock import AsyncMock

from packages.executions.models.domain.execution import ExecutionProjection
from packages.logs.models.domain.workflow_log import WorkflowLogModel
from packages.logs.services.log_correlation_service import LogCorrelationService


def _projection(run_id):
    return ExecutionProjection(execution_id=f"wf-{run_id}", run_id=run_id, workflow_type="Router")


def _log(run_id, message):
    return WorkflowLogModel(
        id=1,
        tenant_id="tenant-a",
        workflow_id=f"wf-{run_id}",
        workflow_run_id=run_id,
        level="Information",
        message=message,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


class TestLogCorrelationService:
    async def test_attaches_by_exact_run_id(self):
        repo = AsyncMock()
        repo.get_last_log_per_run = AsyncMock(return_value={"run-1": _log("run-1", "hello")})
        service = LogCorrelationService(repo)
        projections = [_projection("run-1"), _projection("run-2")]

        result = await service.attach_last_logs("tenant-a", projections)

        assert len(result) == 2
        assert result[0].last_log.message == "hello"
        assert result[1].last_log is None
        args, kwargs = repo.get_last_log_per_run.call_args
        assert args == ("tenant-a",)
        assert sorted(kwargs["run_ids"]) == ["run-1", "run-2"]

    async def test_empty_page_skips_lookup(self):
        repo = AsyncMock()
        service = LogCorrelationService(repo)

        assert await service.attach_last_logs("tenant-a", []) == []
        repo.get_last_log_per_run.assert_not_called()
