from fastapi import APIRouter, Depends

from api.v1.routes import health
from packages.auth.dependencies import get_current_active_user
from packages.executions.routes import executions

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

api_router.include_router(
    executions.router,
    tags=["executions"],
    dependencies=[Depends(get_current_active_user)],
)
