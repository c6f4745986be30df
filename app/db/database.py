"""
Async SQLAlchemy database setup and session management.
"""
from datetime import datetime, timezone
from typing import Any, Dict
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.core.config import settings


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    # NullPool opens a connection per checkout, so sessions never outlive their event loop
    if settings.DEBUG or settings.DB_NULL_POOL:
        options["poolclass"] = NullPool
    return options


engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **_engine_options())

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Base class for all models
Base = declarative_base()


async def init_db(bind: AsyncEngine = None) -> None:
    """
    Create all tables.
    Called on application startup and by the seed script.
    """
    async with (bind or engine).begin() as conn:
        # Import models so they register on Base.metadata
        from app.models import user, entity, review, chat  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)


async def drop_db(bind: AsyncEngine = None) -> None:
    """Drop all tables."""
    async with (bind or engine).begin() as conn:
        from app.models import user, entity, review, chat  # noqa: F401

        await conn.run_sync(Base.metadata.drop_all)


async def close_db() -> None:
    """
    Close database connections.
    Called on application shutdown.
    """
    await engine.dispose()
