"""Unit tests for the Redis fixed-window purchase limiter."""

from unittest.mock import AsyncMock

import pytest

from src.pk_common.errors import RateLimitError
from src.pk_gateway.middleware.rate_limit import check_rate_limit


def _mock_redis(count: int) -> AsyncMock:
    redis = AsyncMock()
    redis.incr.return_value = count
    return redis


class TestCheckRateLimit:
    async def test_first_hit_sets_expiry(self) -> None:
        redis = _mock_redis(1)

        count = await check_rate_limit(redis, "buyer-1", 30, now=120.0)

        assert count == 1
        redis.incr.assert_awaited_once_with("ratelimit:buy:buyer-1:2")
        redis.expire.assert_awaited_once_with("ratelimit:buy:buyer-1:2", 60)

    async def test_later_hit_keeps_expiry(self) -> None:
        redis = _mock_redis(5)

        await check_rate_limit(redis, "buyer-1", 30, now=120.0)

        redis.expire.assert_not_awaited()

    async def test_at_limit_passes(self) -> None:
        assert await check_rate_limit(_mock_redis(30), "buyer-1", 30, now=0.0) == 30

    async def test_over_limit_raises(self) -> None:
        with pytest.raises(RateLimitError) as exc_info:
            await check_rate_limit(_mock_redis(31), "buyer-1", 30, now=0.0)
        assert exc_info.value.http_status == 429

    async def test_window_key_changes_each_minute(self) -> None:
        redis = _mock_redis(1)

        await check_rate_limit(redis, "buyer-1", 30, now=59.9)
        await check_rate_limit(redis, "buyer-1", 30, now=60.0)

        keys = [c.args[0] for c in redis.incr.await_args_list]
        assert keys == ["ratelimit:buy:buyer-1:0", "ratelimit:buy:buyer-1:1"]
