from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request

from common.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    RemoteBackendError,
    ValidationError,
)
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.providers.orchestration import get_workflow_backend
from common.providers.rate_limiter.limiter import limiter
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.executions.models.schemas.execution import (
    AgentExecutionsResponse,
    ExecutionResponse,
    PaginatedExecutionsResponse,
)
from packages.executions.services.distinct_tag_service import DistinctTagService
from packages.executions.services.execution_finder_service import (
    ExecutionFinderService,
)

router = APIRouter()
logger = get_logger(__name__)


def get_execution_finder_service() -> ExecutionFinderService:
    return ExecutionFinderService(get_workflow_backend())


def get_distinct_tag_service() -> DistinctTagService:
    return DistinctTagService(get_workflow_backend())


def _to_http_error(e: Exception, action: str) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, RemoteBackendError):
        logger.error(f"Orchestration backend failure while trying to {action}: {e}")
        return HTTPException(status_code=502, detail=f"Failed to {action}")
    logger.error(f"Unexpected error while trying to {action}: {e}", exc_info=True)
    return HTTPException(status_code=500, detail=f"Failed to {action}")


@router.get("/executions", response_model=PaginatedExecutionsResponse)
@limiter.limit("60/minute")
@trace_span
async def list_executions(
    request: Request,
    status: Optional[str] = Query(None),
    agent: Optional[str] = Query(None),
    workflow_type: Optional[str] = Query(None, alias="workflowType"),
    owner: Optional[str] = Query(None),
    id_postfix: Optional[str] = Query(None, alias="idPostfix"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    page_token: Optional[str] = Query(None, alias="pageToken"),
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    finder: ExecutionFinderService = Depends(get_execution_finder_service),
):
    """List agent executions one page at a time."""
    try:
        page = await finder.list_executions(
            current_user,
            agent_name=agent,
            status=status,
            workflow_type=workflow_type,
            owner=owner,
            id_postfix=id_postfix,
            page_token=page_token,
            page_size=page_size,
        )
    except Exception as e:
        raise _to_http_error(e, "list executions")

    return PaginatedExecutionsResponse(
        workflows=[ExecutionResponse.model_validate(p) for p in page.items],
        next_page_token=page.next_page_token,
        page_size=page.page_size,
        has_next_page=page.has_next_page,
        total_count=page.total_count,
    )


@router.get("/executions/running", response_model=List[ExecutionResponse])
@trace_span
async def list_running_executions(
    agent: Optional[str] = Query(None),
    workflow_type: Optional[str] = Query(None, alias="workflowType"),
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    finder: ExecutionFinderService = Depends(get_execution_finder_service),
):
    """List running executions, optionally for one agent and workflow type."""
    try:
        executions = await finder.list_running_executions(
            current_user, agent_name=agent, workflow_type=workflow_type
        )
    except Exception as e:
        raise _to_http_error(e, "list running executions")

    return [ExecutionResponse.model_validate(e) for e in executions]


@router.get("/executions/by-agent", response_model=List[AgentExecutionsResponse])
@trace_span
async def list_executions_by_agent(
    status: Optional[str] = Query(None),
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    finder: ExecutionFinderService = Depends(get_execution_finder_service),
):
    """List visible executions grouped by agent."""
    try:
        groups = await finder.list_executions_by_agent(current_user, status=status)
    except Exception as e:
        raise _to_http_error(e, "list executions by agent")

    return [AgentExecutionsResponse.model_validate(g) for g in groups]


@router.get("/executions/tags", response_model=List[str])
@trace_span
async def list_distinct_tags(
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    tag_service: DistinctTagService = Depends(get_distinct_tag_service),
):
    """Distinct activation tags across the caller's visible executions."""
    try:
        return await tag_service.get_distinct_tag_values(current_user)
    except Exception as e:
        raise _to_http_error(e, "list execution tags")


@router.get("/executions/{executionId}", response_model=ExecutionResponse)
@trace_span
async def get_execution(
    execution_id: Annotated[str, Path(alias="executionId")],
    run_id: Optional[str] = Query(None, alias="runId"),
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    finder: ExecutionFinderService = Depends(get_execution_finder_service),
):
    """Get one execution with its current activity and active worker count."""
    try:
        execution = await finder.get_execution(
            execution_id, current_user, run_id=run_id
        )
    except Exception as e:
        raise _to_http_error(e, "get execution")

    return ExecutionResponse.model_validate(execution)
