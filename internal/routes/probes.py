"""Kubernetes probe endpoints.

These endpoints are internal-only - not exposed via ingress.
Ingress only routes /api/* paths, so these root-level paths are only
reachable by k8s probes hitting the pod IP directly.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.providers.orchestration import (
    WorkflowBackendInterface,
    get_workflow_backend,
)

router = APIRouter(tags=["internal"])


@router.get("/healthz", include_in_schema=False)
async def healthz():
    """Liveness probe - is the process alive?"""
    return {"status": "ok"}


@router.get("/readyz", include_in_schema=False)
async def readyz(backend: WorkflowBackendInterface = Depends(get_workflow_backend)):
    """Readiness probe - can we reach the orchestration backend?"""
    if not await backend.check_health():
        return JSONResponse(
            status_code=503, content={"status": "unavailable", "temporal": "down"}
        )
    return {"status": "ok", "temporal": "up"}
