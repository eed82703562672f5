import asyncio
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from common.core.otel_axiom_exporter import get_logger, trace_span
from packages.executions.models.domain.execution import ExecutionProjection
from packages.logs.repositories.workflow_log_repository import WorkflowLogRepository

logger = get_logger(__name__)


class LogCorrelationService:
    """Attaches the latest log record of each run to execution projections."""

    def __init__(self, log_repository: Optional[WorkflowLogRepository] = None):
        self.log_repository = log_repository or WorkflowLogRepository()

    @trace_span
    async def attach_last_logs(
        self, tenant_id: str, projections: List[ExecutionProjection]
    ) -> List[ExecutionProjection]:
        """Set ``last_log`` on every projection whose run has logs.

        Enrichment only: projections are never dropped, and a log store
        failure leaves them without logs.
        """
        if not projections:
            return projections

        run_ids = list({projection.run_id for projection in projections})
        try:
            last_logs = await self.log_repository.get_last_log_per_run(
                tenant_id, run_ids=run_ids
            )
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error(
                f"Failed to load last logs for tenant {tenant_id}: {e}", exc_info=True
            )
            return projections

        for projection in projections:
            projection.last_log = last_logs.get(projection.run_id)

        return projections
