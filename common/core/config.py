from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment, CacheProviderType


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "agent-control-plane"
    api_version: str = "v1"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "control_plane"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @property
    def redis_connection_url(self) -> str:
        """Construct Redis URL from components."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        else:
            return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Caching
    cache_provider: CacheProviderType = CacheProviderType.MEMORY

    # Rate limiting (memory:// or a redis:// uri)
    rate_limit_storage_uri: str = "memory://"
    rate_limit_default: str = "120/minute"

    # OpenTelemetry
    otel_service_name: str = "agent-control-plane"
    otel_service_version: str = "0.1.0"

    # Axiom (export disabled when no token is configured)
    axiom_token: Optional[str] = None
    axiom_dataset: str = "agent-control-plane"

    # Temporal
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_api_key: Optional[str] = None
    temporal_rpc_timeout_seconds: float = 10.0
    temporal_max_retries: int = 3
    temporal_retry_initial_interval_ms: int = 100
    temporal_retry_max_interval_ms: int = 2000

    # Execution visibility
    worker_liveness_window_seconds: int = 60
    distinct_tag_scan_limit: int = 500
    distinct_tag_cache_ttl_seconds: int = 300
    execution_scan_limit: int = 1000

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:3001",
            ]
        return ["https://console.agents.example.com"]


settings = Settings()
