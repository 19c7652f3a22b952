"""
Shared fixtures for all tests.

Provides:
- In-memory storage
- SQL storage on a throwaway SQLite database
- An HTTP client bound to the app with the storage dependency overridden
"""
import os

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Configure the app for tests before settings are imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SEED_DEFAULT_TIME_SLOTS", "false")

from agenda.database import get_storage
from agenda.main import app
from agenda.models.schedule_models import Base
from agenda.storage import MemoryStorage, SqlStorage

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory SQLite database with every table created."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_storage(test_engine) -> SqlStorage:
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    return SqlStorage(session_maker)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request):
    """Runs the test against both storage backends."""
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlStorage(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


@pytest_asyncio.fixture
async def client(memory_storage):
    """HTTP client talking to the app in-process."""
    app.dependency_overrides[get_storage] = lambda: memory_storage
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()

