from abc import ABC, abstractmethod
from typing import Mapping, Optional

from packages.auth.models.domain.authenticated_user import AuthenticatedUser


class AuthProviderInterface(ABC):
    """Resolves the caller of a request to an authenticated user."""

    @abstractmethod
    async def authenticate(
        self, headers: Mapping[str, str]
    ) -> Optional[AuthenticatedUser]:
        """Return the caller, or None if the request is not authenticated"""
        pass
