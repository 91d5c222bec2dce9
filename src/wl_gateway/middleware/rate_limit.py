"""Per-user fixed-window rate limiting for bet placement.

Key pattern: "ratelimit:{user_id}:{group}", one window per minute.
Redis INCR + EXPIRE; the first hit in a window sets the expiry.

Fails open: when Redis is unreachable the bet goes through and a warning
is logged. Redis only holds counters, so nothing else is at stake.

Called from the bet route rather than installed as middleware because the
limit is per authenticated user, and identity is only known after the
token has been checked.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings
from src.wl_common.errors import RateLimitError
from src.wl_common.redis_client import get_redis

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


async def check_rate_limit(redis: aioredis.Redis, key: str, limit: int) -> None:
    """Raise RateLimitError once `key` has been hit more than `limit` times this window."""
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, _WINDOW_SECONDS)
    if count > limit:
        logger.info("Rate limit hit: %s (%d > %d)", key, count, limit)
        raise RateLimitError()


async def enforce_bet_rate_limit(user_id: str) -> None:
    """Apply BET_RATE_LIMIT_PER_MINUTE to `user_id`; a limit of 0 disables it."""
    limit = settings.BET_RATE_LIMIT_PER_MINUTE
    if limit <= 0:
        return
    key = f"ratelimit:{user_id}:bets"
    try:
        redis = await get_redis()
        await check_rate_limit(redis, key, limit)
    except RedisError as exc:
        logger.warning("Rate limit skipped, Redis unavailable: %s: %s", key, exc)
