"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool (both created at import time)
remain valid across the entire test session.

Pre-condition: a migrated database (alembic upgrade head) and Redis.
Every test seeds its own profile/market rows with fresh UUIDs, so runs
never collide with each other or with leftover data.
"""

import uuid
from collections.abc import Awaitable, Callable
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.main import app
from src.wl_common.database import async_session_factory

SeedProfile = Callable[..., Awaitable[str]]
SeedMarket = Callable[..., Awaitable[str]]


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(loop_scope="session")
async def seed_profile() -> SeedProfile:
    async def _seed(balance: str = "100") -> str:
        user_id = str(uuid.uuid4())
        async with async_session_factory() as db:
            await db.execute(
                text(
                    "INSERT INTO profiles (id, username, sol_balance) "
                    "VALUES (:id, :username, :balance)"
                ),
                {"id": user_id, "username": f"it_{user_id[:8]}", "balance": Decimal(balance)},
            )
            await db.commit()
        return user_id

    return _seed


@pytest_asyncio.fixture(loop_scope="session")
async def seed_market() -> SeedMarket:
    async def _seed(
        price_a: str = "0.5", status: str = "Active", fee_rate: str | None = None
    ) -> str:
        async with async_session_factory() as db:
            result = await db.execute(
                text("""
                    INSERT INTO markets
                        (title, outcome_a, outcome_b, price_a, price_b,
                         status, end_time, platform_fee_rate)
                    VALUES
                        ('Integration market', 'Yes', 'No', :price_a, :price_b,
                         :status, NOW() + INTERVAL '7 days', :fee_rate)
                    RETURNING id
                """),
                {
                    "price_a": Decimal(price_a),
                    "price_b": 1 - Decimal(price_a),
                    "status": status,
                    "fee_rate": Decimal(fee_rate) if fee_rate is not None else None,
                },
            )
            market_id = str(result.scalar_one())
            await db.commit()
        return market_id

    return _seed


async def fetch_row(sql: str, **params: object) -> object:
    async with async_session_factory() as db:
        result = await db.execute(text(sql), params)
        return result.fetchone()
