from fastapi import Depends, HTTPException, Request, status

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.providers.factory import get_auth_provider
from packages.auth.providers.interface import AuthProviderInterface

logger = get_logger(__name__)


@trace_span
async def get_current_user(
    request: Request,
    auth_provider: AuthProviderInterface = Depends(get_auth_provider),
) -> AuthenticatedUser:
    """Get current authenticated user from the registered auth provider."""
    user = await auth_provider.authenticate(request.headers)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@trace_span
async def get_current_active_user(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Get current active user."""
    logger.debug(
        f"Request for tenant_id={current_user.tenant_id} user_id={current_user.user_id}"
    )
    return current_user
