"""Shared redis.asyncio client.

Redis holds rate-limit counters and nothing else. Balances and prices
live only in PostgreSQL, so losing Redis can never lose money.
"""

import redis.asyncio as aioredis

from config.settings import settings

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Return the process-wide client, creating it on first use."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT_S,
        )
    return _client


async def check_redis() -> None:
    redis = await get_redis()
    await redis.ping()


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
