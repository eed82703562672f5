from typing import Optional

from temporalio.client import Client
from temporalio.service import RetryConfig

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)

_client: Optional[Client] = None


def _retry_config() -> RetryConfig:
    # Bounded exponential backoff; the visibility service only issues idempotent reads
    return RetryConfig(
        initial_interval_millis=settings.temporal_retry_initial_interval_ms,
        max_interval_millis=settings.temporal_retry_max_interval_ms,
        multiplier=2.0,
        max_retries=settings.temporal_max_retries,
    )


async def get_temporal_client() -> Client:
    """Connect to Temporal (Cloud or self-hosted), reusing one client per process.

    Uses settings to determine connection params:
    - temporal_host: Server address
    - temporal_namespace: Namespace (required for Cloud)
    - temporal_api_key: API key (enables TLS, required for Cloud)
    """
    global _client

    if _client is not None:
        return _client

    host = settings.temporal_host
    namespace = settings.temporal_namespace
    api_key = settings.temporal_api_key

    logger.info(f"Connecting to Temporal at {host} (namespace: {namespace})")

    if api_key:
        client = await Client.connect(
            host,
            namespace=namespace,
            api_key=api_key,
            tls=True,
            retry_config=_retry_config(),
        )
    else:
        client = await Client.connect(
            host,
            namespace=namespace,
            retry_config=_retry_config(),
        )

    logger.info("Connected to Temporal")
    _client = client
    return client
