from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class CacheProviderType(str, Enum):
    """Cache provider types."""

    MEMORY = "memory"
    REDIS = "redis"
    PASSTHROUGH = "passthrough"


class SystemRole(str, Enum):
    """Roles that grant tenant-wide visibility."""

    SYS_ADMIN = "SysAdmin"
    TENANT_ADMIN = "TenantAdmin"


class ExecutionMemoKey(str, Enum):
    """Memo and search attribute keys stamped on every agent execution."""

    TENANT_ID = "tenantId"
    AGENT = "agent"
    USER_ID = "userId"
    ID_POSTFIX = "idPostfix"


class ExecutionSearchAttribute(str, Enum):
    """Built-in visibility attributes of the orchestration backend."""

    EXECUTION_STATUS = "ExecutionStatus"
    WORKFLOW_TYPE = "WorkflowType"


NOT_AVAILABLE = "N/A"


class ExecutionStatus(str, Enum):
    """Canonical execution status tokens of the visibility query grammar."""

    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELED = "Canceled"
    TERMINATED = "Terminated"
    CONTINUED_AS_NEW = "ContinuedAsNew"
    TIMED_OUT = "TimedOut"
