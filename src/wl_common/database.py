"""Async SQLAlchemy engine and per-request sessions.

One engine per process. Every request gets its own AsyncSession; the
bet service drives commit/rollback on it explicitly, read endpoints never
write and just let it close.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the ORM mirrors in each module's db_models.py."""


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# expire_on_commit=False: rows returned by RETURNING stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session that is closed after the request.

    Closing a session with an open transaction rolls it back, so a request
    cancelled mid-bet leaves nothing behind and releases its row locks.
    """
    async with async_session_factory() as session:
        yield session


async def check_database() -> None:
    """Fail fast at startup when PostgreSQL is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
