from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from common.core.config import settings
from common.core.constants import Environment
from common.core.otel_axiom_exporter import _initialize_telemetry, get_logger
from api.v1.routes.router import api_router
from internal.routes import probes
from common.providers.rate_limiter.limiter import limiter
from common.providers.caching import close_cache_provider

_initialize_telemetry()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {settings.app_name} (environment: {settings.environment.value})"
    )
    yield
    logger.info("Shutting down application...")
    await close_cache_provider()


# Only expose OpenAPI docs in local development
is_local = settings.environment == Environment.LOCAL

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs" if is_local else None,
    redoc_url="/redoc" if is_local else None,
    openapi_url="/openapi.json" if is_local else None,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

FastAPIInstrumentor.instrument_app(app)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")

# k8s probes hit the pod directly, outside /api/v1
app.include_router(probes.router)
