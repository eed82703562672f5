from typing import Optional

from common.core.constants import ExecutionStatus

_STATUS_ALIASES = {
    "running": ExecutionStatus.RUNNING,
    "completed": ExecutionStatus.COMPLETED,
    "failed": ExecutionStatus.FAILED,
    "canceled": ExecutionStatus.CANCELED,
    "terminated": ExecutionStatus.TERMINATED,
    "continuedasnew": ExecutionStatus.CONTINUED_AS_NEW,
    "timedout": ExecutionStatus.TIMED_OUT,
}


def normalize_status(status: Optional[str]) -> Optional[str]:
    """Map a user-supplied status to its canonical token.

    Matching is case-insensitive. Unknown values are returned exactly as
    given so the backend decides whether they are valid.
    """
    if status is None:
        return None
    canonical = _STATUS_ALIASES.get(status.strip().lower())
    return canonical.value if canonical else status
