"""Cache key generators for execution services."""

from packages.auth.models.domain.authenticated_user import AuthenticatedUser


def distinct_tag_values_key(user: AuthenticatedUser) -> str:
    return f"executions:distinct_tags:{user.tenant_id}:{user.user_id}"
