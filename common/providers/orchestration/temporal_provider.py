from contextlib import asynccontextmanager
from datetime import timedelta, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

from temporalio.api.enums.v1 import EventType, TaskQueueType
from temporalio.api.history.v1 import HistoryEvent as HistoryEventProto
from temporalio.api.taskqueue.v1 import TaskQueue
from temporalio.api.workflowservice.v1 import DescribeTaskQueueRequest
from temporalio.client import Client, WorkflowExecution, WorkflowExecutionStatus
from temporalio.service import RPCError, RPCStatusCode

from common.core.config import settings
from common.core.constants import ExecutionStatus
from common.core.exceptions import NotFoundError, RemoteBackendError
from common.core.otel_axiom_exporter import get_logger, trace_span
from common.temporal.client import get_temporal_client

from .interface import WorkflowBackendInterface
from .models import (
    HistoryEvent,
    HistoryEventKind,
    TaskQueuePoller,
    WorkflowExecutionInfo,
)
from .predicates import Predicate, render

logger = get_logger(__name__)

_STATUS_TOKENS = {
    WorkflowExecutionStatus.RUNNING: ExecutionStatus.RUNNING,
    WorkflowExecutionStatus.COMPLETED: ExecutionStatus.COMPLETED,
    WorkflowExecutionStatus.FAILED: ExecutionStatus.FAILED,
    WorkflowExecutionStatus.CANCELED: ExecutionStatus.CANCELED,
    WorkflowExecutionStatus.TERMINATED: ExecutionStatus.TERMINATED,
    WorkflowExecutionStatus.CONTINUED_AS_NEW: ExecutionStatus.CONTINUED_AS_NEW,
    WorkflowExecutionStatus.TIMED_OUT: ExecutionStatus.TIMED_OUT,
}

_EVENT_KINDS = {
    EventType.EVENT_TYPE_ACTIVITY_TASK_SCHEDULED: HistoryEventKind.ACTIVITY_SCHEDULED,
    EventType.EVENT_TYPE_ACTIVITY_TASK_STARTED: HistoryEventKind.ACTIVITY_STARTED,
    EventType.EVENT_TYPE_ACTIVITY_TASK_COMPLETED: HistoryEventKind.ACTIVITY_COMPLETED,
    EventType.EVENT_TYPE_ACTIVITY_TASK_FAILED: HistoryEventKind.ACTIVITY_FAILED,
    EventType.EVENT_TYPE_ACTIVITY_TASK_TIMED_OUT: HistoryEventKind.ACTIVITY_TIMED_OUT,
    EventType.EVENT_TYPE_ACTIVITY_TASK_CANCELED: HistoryEventKind.ACTIVITY_CANCELED,
    EventType.EVENT_TYPE_WORKFLOW_EXECUTION_COMPLETED: HistoryEventKind.WORKFLOW_COMPLETED,
}

# Attribute field of each activity end event that carries scheduled_event_id
_END_EVENT_ATTRIBUTES = {
    HistoryEventKind.ACTIVITY_STARTED: "activity_task_started_event_attributes",
    HistoryEventKind.ACTIVITY_COMPLETED: "activity_task_completed_event_attributes",
    HistoryEventKind.ACTIVITY_FAILED: "activity_task_failed_event_attributes",
    HistoryEventKind.ACTIVITY_TIMED_OUT: "activity_task_timed_out_event_attributes",
    HistoryEventKind.ACTIVITY_CANCELED: "activity_task_canceled_event_attributes",
}


def map_history_event(event: HistoryEventProto) -> HistoryEvent:
    """Convert a Temporal history event protobuf to the domain event."""
    kind = _EVENT_KINDS.get(event.event_type, HistoryEventKind.OTHER)

    if kind == HistoryEventKind.ACTIVITY_SCHEDULED:
        attributes = event.activity_task_scheduled_event_attributes
        return HistoryEvent(
            event_id=event.event_id,
            kind=kind,
            activity_type=attributes.activity_type.name,
            activity_id=attributes.activity_id,
        )

    if kind in _END_EVENT_ATTRIBUTES:
        attributes = getattr(event, _END_EVENT_ATTRIBUTES[kind])
        return HistoryEvent(
            event_id=event.event_id,
            kind=kind,
            scheduled_event_id=attributes.scheduled_event_id,
        )

    return HistoryEvent(event_id=event.event_id, kind=kind)


def _memo_to_strings(memo: Dict[str, Any]) -> Dict[str, str]:
    return {key: str(value) for key, value in memo.items() if value is not None}


async def map_execution(execution: WorkflowExecution) -> WorkflowExecutionInfo:
    """Convert a described or listed Temporal execution to the domain model."""
    status = _STATUS_TOKENS.get(execution.status) if execution.status else None
    return WorkflowExecutionInfo(
        execution_id=execution.id,
        run_id=execution.run_id,
        workflow_type=execution.workflow_type,
        status=status.value if status else None,
        task_queue=execution.task_queue,
        history_length=execution.history_length,
        start_time=execution.start_time,
        execution_time=execution.execution_time,
        close_time=execution.close_time,
        parent_id=execution.parent_id,
        parent_run_id=execution.parent_run_id,
        memo=_memo_to_strings(await execution.memo()),
    )


class TemporalWorkflowBackend(WorkflowBackendInterface):
    """Temporal implementation of the workflow backend.

    The client is connected lazily on first use. Every RPC is bounded by
    ``settings.temporal_rpc_timeout_seconds``; retries of these idempotent
    reads are handled by the client's retry config.
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client
        self._rpc_timeout = timedelta(seconds=settings.temporal_rpc_timeout_seconds)

    async def _get_client(self) -> Client:
        if self._client is None:
            self._client = await get_temporal_client()
        return self._client

    @asynccontextmanager
    async def _remote_call(self, operation: str, target: str):
        try:
            yield
        except RPCError as e:
            if e.status == RPCStatusCode.NOT_FOUND:
                raise NotFoundError(f"Execution {target} not found") from e
            logger.error(f"Temporal {operation} failed for {target}: {e.status} {e}")
            raise RemoteBackendError(f"Temporal {operation} failed") from e
        except (NotFoundError, RemoteBackendError):
            raise
        except Exception as e:
            logger.error(f"Temporal {operation} failed for {target}: {e}")
            raise RemoteBackendError(f"Temporal {operation} failed") from e

    @trace_span
    async def describe(
        self, execution_id: str, run_id: Optional[str] = None
    ) -> WorkflowExecutionInfo:
        async with self._remote_call("describe", execution_id):
            client = await self._get_client()
            handle = client.get_workflow_handle(execution_id, run_id=run_id)
            description = await handle.describe(rpc_timeout=self._rpc_timeout)
            return await map_execution(description)

    @trace_span
    async def fetch_history(
        self, execution_id: str, run_id: Optional[str] = None
    ) -> List[HistoryEvent]:
        async with self._remote_call("fetch_history", execution_id):
            client = await self._get_client()
            handle = client.get_workflow_handle(execution_id, run_id=run_id)
            history = await handle.fetch_history(rpc_timeout=self._rpc_timeout)
            return [map_history_event(event) for event in history.events]

    async def list_executions(
        self, predicate: Predicate, limit: int
    ) -> AsyncIterator[WorkflowExecutionInfo]:
        query = render(predicate)
        logger.debug(f"Listing executions (limit={limit}): {query}")

        async with self._remote_call("list_workflows", query):
            client = await self._get_client()
            count = 0
            async for execution in client.list_workflows(
                query,
                limit=limit,
                page_size=min(limit, 1000),
                rpc_timeout=self._rpc_timeout,
            ):
                yield await map_execution(execution)
                count += 1
                if count >= limit:
                    break

    @trace_span
    async def describe_task_queue(self, task_queue: str) -> List[TaskQueuePoller]:
        async with self._remote_call("describe_task_queue", task_queue):
            client = await self._get_client()
            response = await client.workflow_service.describe_task_queue(
                DescribeTaskQueueRequest(
                    namespace=client.namespace,
                    task_queue=TaskQueue(name=task_queue),
                    task_queue_type=TaskQueueType.TASK_QUEUE_TYPE_WORKFLOW,
                ),
                retry=True,
                timeout=self._rpc_timeout,
            )
            return [
                TaskQueuePoller(
                    identity=poller.identity,
                    last_access_time=(
                        poller.last_access_time.ToDatetime(tzinfo=timezone.utc)
                        if poller.HasField("last_access_time")
                        else None
                    ),
                )
                for poller in response.pollers
            ]

    async def check_health(self) -> bool:
        try:
            client = await self._get_client()
            return await client.service_client.check_health(
                timeout=self._rpc_timeout
            )
        except Exception as e:
            logger.warning(f"Temporal health check failed: {e}")
            return False
