"""Database connection and the storage dependency"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from agenda.config import settings
from agenda.models.schedule_models import Base
from agenda.storage import MemoryStorage, SqlStorage, Storage

# Load .env from the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker] = None
_storage: Optional[Storage] = None


def get_engine() -> AsyncEngine:
    """Create the engine on first use."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(settings.database_url, echo=False, pool_pre_ping=True)
    return _engine


def get_session_maker() -> async_sessionmaker:
    global _session_maker
    if _session_maker is None:
        _session_maker = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_maker


def get_storage() -> Storage:
    """Dependency returning the configured storage"""
    global _storage
    if _storage is None:
        if settings.STORAGE_BACKEND == "memory":
            _storage = MemoryStorage()
        else:
            _storage = SqlStorage(get_session_maker())
        logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    return _storage


async def init_db():
    """Create tables"""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Dispose the connection pool"""
    if _engine is not None:
        await _engine.dispose()
