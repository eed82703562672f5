from typing import Optional

from common.core.otel_axiom_exporter import get_logger

from .interface import WorkflowBackendInterface
from .temporal_provider import TemporalWorkflowBackend

logger = get_logger(__name__)

# Global instance
_workflow_backend: Optional[WorkflowBackendInterface] = None


def get_workflow_backend() -> WorkflowBackendInterface:
    """Get the process-wide workflow backend, created on first use."""
    global _workflow_backend

    if _workflow_backend is None:
        _workflow_backend = TemporalWorkflowBackend()
        logger.info("Initialized Temporal workflow backend")

    return _workflow_backend
