class AppException(Exception):
    """Base application exception."""

    pass


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class PermissionDeniedError(AppException):
    """Caller lacks the permission required for the resource."""

    pass


class RemoteBackendError(AppException):
    """The orchestration backend failed, timed out or was unreachable."""

    pass
