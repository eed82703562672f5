"""Process-wide auth provider."""

from typing import Optional

from packages.auth.providers.interface import AuthProviderInterface
from packages.auth.providers.gateway_header_provider import GatewayHeaderAuthProvider

_auth_provider: Optional[AuthProviderInterface] = None


def get_auth_provider() -> AuthProviderInterface:
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = GatewayHeaderAuthProvider()
    return _auth_provider
