from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from common.core.config import settings
from common.core.constants import NOT_AVAILABLE
from common.core.otel_axiom_exporter import get_logger, log_span_event, trace_span
from common.providers.orchestration import WorkflowBackendInterface
from packages.executions.models.domain.best_effort import BestEffort

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkerLivenessService:
    """Counts workers that polled a task queue within the liveness window."""

    def __init__(
        self,
        backend: WorkflowBackendInterface,
        window_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.backend = backend
        self.window = timedelta(
            seconds=window_seconds or settings.worker_liveness_window_seconds
        )
        self._clock = clock

    @trace_span
    async def count_active_workers(self, task_queue: Optional[str]) -> BestEffort[str]:
        """Active worker count as a string, degrading to "N/A" on any failure."""
        if not task_queue:
            return BestEffort.degraded_to(NOT_AVAILABLE)

        try:
            pollers = await self.backend.describe_task_queue(task_queue)
        except Exception as e:
            log_span_event(
                "worker_liveness_degraded",
                {"task_queue": task_queue, "error": str(e)},
            )
            logger.warning(f"Worker liveness probe failed for {task_queue}: {e}")
            return BestEffort.degraded_to(NOT_AVAILABLE)

        cutoff = self._clock() - self.window
        active = sum(
            1
            for poller in pollers
            if poller.last_access_time is not None and poller.last_access_time >= cutoff
        )
        return BestEffort.ok(str(active))
