"""Shared Redis connection for the purchase rate limiter.

Redis holds nothing but short-lived per-caller counters. Balances, listing
state and the trade ledger are all in PostgreSQL, so losing Redis only loses
the current rate-limit windows. Reads time out after
settings.REDIS_SOCKET_TIMEOUT so a stalled Redis fails a buy quickly instead
of parking it behind the socket.
"""

import logging

import redis.asyncio as aioredis

from config.settings import settings

logger = logging.getLogger(__name__)

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Lazily create the process-wide client; also used as a FastAPI dependency."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _redis_pool


async def ping_redis() -> None:
    """Startup check: raise if the rate limiter's backend is unreachable."""
    redis = await get_redis()
    await redis.ping()
    logger.info("Redis reachable for purchase rate limiting")


async def close_redis() -> None:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None
