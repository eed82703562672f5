from .interface import WorkflowBackendInterface
from .factory import get_workflow_backend
from .models import (
    HistoryEvent,
    HistoryEventKind,
    TaskQueuePoller,
    WorkflowExecutionInfo,
)
from .predicates import And, Eq, In, Predicate, render
from .temporal_provider import TemporalWorkflowBackend

__all__ = [
    "WorkflowBackendInterface",
    "get_workflow_backend",
    "HistoryEvent",
    "HistoryEventKind",
    "TaskQueuePoller",
    "WorkflowExecutionInfo",
    "And",
    "Eq",
    "In",
    "Predicate",
    "render",
    "TemporalWorkflowBackend",
]
