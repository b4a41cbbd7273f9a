import contextlib

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.main import app
from src.models.base import BaseModel

# imported for their side effect of registering tables on the metadata
from src.projects.repository import orm_models as project_orm_models  # noqa: F401
from src.rsvp.repository import orm_models as rsvp_orm_models  # noqa: F401
from src.wishes.repository import orm_models as wishes_orm_models  # noqa: F401

SQLITE_TEST_DSN = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def client():
    """Create a test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def client_factory():
    """Build a test client with the given dependency overrides installed."""

    @contextlib.asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest_asyncio.fixture
async def async_session():
    """A session on a fresh in-memory database with every table created."""
    engine = create_async_engine(
        SQLITE_TEST_DSN,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
