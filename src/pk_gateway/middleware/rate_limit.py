"""Purchase rate limiting: Redis fixed window per caller.

Key pattern: "ratelimit:buy:{identity}:{minute}". The first INCR in a window
sets a 60s EXPIRE; beyond settings.PURCHASE_RATE_LIMIT_PER_MIN the call
fails with RateLimitError (9001, HTTP 429).
"""

import logging
import time
from typing import Annotated

import redis.asyncio as aioredis
from fastapi import Depends

from config.settings import settings
from src.pk_common.errors import RateLimitError
from src.pk_common.redis_client import get_redis
from src.pk_gateway.auth.dependencies import Caller, get_caller

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


async def check_rate_limit(
    redis: aioredis.Redis, identity: str, limit: int, now: float | None = None
) -> int:
    """Count one hit for `identity` in the current window; raise past `limit`."""
    window = int((now if now is not None else time.time()) // _WINDOW_SECONDS)
    key = f"ratelimit:buy:{identity}:{window}"
    count = int(await redis.incr(key))
    if count == 1:
        await redis.expire(key, _WINDOW_SECONDS)
    if count > limit:
        logger.warning("Purchase rate limit hit: caller=%s count=%d", identity, count)
        raise RateLimitError()
    return count


async def limit_purchases(
    caller: Annotated[Caller, Depends(get_caller)],
    redis: Annotated[aioredis.Redis, Depends(get_redis)],
) -> Caller:
    """FastAPI dependency guarding the buy endpoint."""
    await check_rate_limit(redis, caller.identity, settings.PURCHASE_RATE_LIMIT_PER_MIN)
    return caller
