from typing import Mapping, Optional

from common.core.otel_axiom_exporter import get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.providers.interface import AuthProviderInterface

logger = get_logger(__name__)

USER_ID_HEADER = "x-user-id"
TENANT_ID_HEADER = "x-tenant-id"
ROLES_HEADER = "x-user-roles"


class GatewayHeaderAuthProvider(AuthProviderInterface):
    """Trusts identity headers set by the authenticating API gateway.

    The gateway validates the bearer token and forwards the user id, tenant
    id and a comma separated role list. The service must not be reachable
    without passing through the gateway.
    """

    async def authenticate(
        self, headers: Mapping[str, str]
    ) -> Optional[AuthenticatedUser]:
        user_id = (headers.get(USER_ID_HEADER) or "").strip()
        tenant_id = (headers.get(TENANT_ID_HEADER) or "").strip()
        if not user_id or not tenant_id:
            return None

        roles = [
            role.strip()
            for role in (headers.get(ROLES_HEADER) or "").split(",")
            if role.strip()
        ]
        return AuthenticatedUser(user_id=user_id, tenant_id=tenant_id, roles=roles)
