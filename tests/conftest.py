"""Shared test fixtures."""

import os

# Settings are read at import time; these must be set before any src import.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BET_RATE_LIMIT_PER_MINUTE", "0")

from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from jose import jwt  # noqa: E402

from config.settings import settings  # noqa: E402
from src.main import app  # noqa: E402

USER_ID = "5b1d3c8e-7f0a-4c2e-9d61-0a2b3c4d5e6f"
MARKET_ID = "9e8d7c6b-5a49-4382-b1a0-f0e1d2c3b4a5"


def make_token(user_id: str = USER_ID, expires_in: timedelta = timedelta(minutes=5)) -> str:
    now = datetime.now(UTC)
    payload = {"sub": user_id, "iat": now, "exp": now + expires_in}
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
