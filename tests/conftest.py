# Shared pytest configuration and fixtures for all test types
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from common.db.base import Base
from common.db.session import get_db_readonly
from common.providers.caching import MemoryCache, set_cache_provider
from common.providers.orchestration import get_workflow_backend
from packages.agents.models.database.agent import AgentEntity, AgentPermissionEntity  # noqa: F401
from packages.agents.models.domain.agent import (
    AgentCreateModel,
    AgentPermissionModel,
    PermissionLevel,
)
from packages.agents.repositories.agent_repository import AgentRepository
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.executions.routes.executions import (
    get_distinct_tag_service,
    get_execution_finder_service,
)
from packages.executions.services.distinct_tag_service import DistinctTagService
from packages.executions.services.execution_finder_service import (
    ExecutionFinderService,
)
from packages.logs.models.database.workflow_log import WorkflowLogEntity  # noqa: F401
from tests.fixtures import TENANT_A, TENANT_B
from tests.fixtures.workflow_backend import FakeWorkflowBackend

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Session factory bound to the test connection; commits become savepoints."""
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """Point operation-scoped sessions at the test database."""
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def memory_cache():
    """Fresh process-wide cache for every test."""
    cache = MemoryCache()
    set_cache_provider(cache)
    yield cache
    set_cache_provider(None)


@pytest_asyncio.fixture
async def test_user():
    return AuthenticatedUser(user_id="user-1", tenant_id=TENANT_A)


@pytest_asyncio.fixture
async def tenant_admin():
    return AuthenticatedUser(user_id="admin-1", tenant_id=TENANT_A, roles=["TenantAdmin"])


@pytest_asyncio.fixture
async def sample_agents():
    """agent-1 readable by user-1, agent-2 owned by user-2, agent-3 in another tenant."""
    repo = AgentRepository()
    agent_1 = await repo.create(
        AgentCreateModel(
            tenant_id=TENANT_A,
            name="agent-1",
            permissions=[
                AgentPermissionModel(user_id="user-1", level=PermissionLevel.READ),
                AgentPermissionModel(user_id="user-2", level=PermissionLevel.OWNER),
            ],
        )
    )
    agent_2 = await repo.create(
        AgentCreateModel(
            tenant_id=TENANT_A,
            name="agent-2",
            permissions=[AgentPermissionModel(user_id="user-2", level=PermissionLevel.OWNER)],
        )
    )
    agent_3 = await repo.create(
        AgentCreateModel(
            tenant_id=TENANT_B,
            name="agent-3",
            permissions=[AgentPermissionModel(user_id="user-1", level=PermissionLevel.WRITE)],
        )
    )
    return agent_1, agent_2, agent_3


@pytest_asyncio.fixture
async def fake_backend():
    return FakeWorkflowBackend()


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession, test_user, fake_backend):
    """Create a test client backed by the fake orchestration backend."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db_readonly] = override_get_db
    app.dependency_overrides[get_current_active_user] = lambda: test_user
    app.dependency_overrides[get_workflow_backend] = lambda: fake_backend
    app.dependency_overrides[get_execution_finder_service] = (
        lambda: ExecutionFinderService(fake_backend)
    )
    app.dependency_overrides[get_distinct_tag_service] = (
        lambda: DistinctTagService(fake_backend)
    )

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
