from typing import Optional, Sequence

from common.providers.orchestration import HistoryEvent
from packages.executions.models.domain.execution import CurrentActivity
from packages.executions.projections.span_matcher import find_last_open_span


def project_current_activity(
    history: Sequence[HistoryEvent],
) -> Optional[CurrentActivity]:
    """The most recently scheduled activity no later event has resolved."""
    scheduled = find_last_open_span(history)
    if scheduled is None:
        return None
    return CurrentActivity(
        activity_type=scheduled.activity_type or "",
        activity_id=scheduled.activity_id or "",
    )
