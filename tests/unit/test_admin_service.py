"""Unit tests for AdminService: platform fee, payment-token mint, stats."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import settings
from src.pk_admin.application.service import AdminService
from src.pk_common.errors import InvalidAmountError, InvalidFeeError, UnsupportedPaymentTokenError
from src.pk_token.domain.models import TokenBalance


def _make_service(**kwargs) -> AdminService:  # type: ignore[no-untyped-def]
    deps = {
        name: AsyncMock()
        for name in ("platform", "assets", "listings", "trades", "distributions", "tokens")
    }
    deps.update(kwargs)
    return AdminService(**deps, clock=lambda: 1_700_000_000)


class TestPlatformFee:
    async def test_get(self) -> None:
        platform = AsyncMock()
        platform.get_fee_bps.return_value = 250
        svc = _make_service(platform=platform)

        result = await svc.get_platform_fee(MagicMock())

        assert result.fee_bps == 250
        assert result.max_fee_bps == settings.MAX_PLATFORM_FEE_BPS
        assert result.fee_account == settings.PLATFORM_FEE_ACCOUNT_ID

    async def test_update(self) -> None:
        platform = AsyncMock()
        svc = _make_service(platform=platform)
        db = AsyncMock()

        result = await svc.update_platform_fee(db, 100)

        platform.set_fee_bps.assert_awaited_once_with(db, 100)
        db.commit.assert_awaited_once()
        assert result.fee_bps == 100

    async def test_zero_fee_allowed(self) -> None:
        svc = _make_service()
        result = await svc.update_platform_fee(AsyncMock(), 0)
        assert result.fee_bps == 0

    async def test_above_limit(self) -> None:
        platform = AsyncMock()
        svc = _make_service(platform=platform)

        with pytest.raises(InvalidFeeError):
            await svc.update_platform_fee(AsyncMock(), settings.MAX_PLATFORM_FEE_BPS + 1)
        platform.set_fee_bps.assert_not_awaited()


class TestMintPaymentToken:
    async def test_mints_supported_token(self) -> None:
        tokens = AsyncMock()
        tokens.mint.return_value = TokenBalance(owner="buyer-1", denomination="USDC", balance=1500)
        svc = _make_service(tokens=tokens)
        db = AsyncMock()

        result = await svc.mint_payment_token(db, "USDC", "buyer-1", 1000)

        tokens.mint.assert_awaited_once_with(db, "USDC", "buyer-1", 1000, "DEPOSIT", None)
        assert result.balance_after == 1500
        db.commit.assert_awaited_once()

    async def test_unsupported_token(self) -> None:
        tokens = AsyncMock()
        svc = _make_service(tokens=tokens)

        with pytest.raises(UnsupportedPaymentTokenError):
            await svc.mint_payment_token(AsyncMock(), "PKA-abc", "buyer-1", 1000)
        tokens.mint.assert_not_awaited()

    async def test_zero_amount(self) -> None:
        svc = _make_service()
        with pytest.raises(InvalidAmountError):
            await svc.mint_payment_token(AsyncMock(), "USDC", "buyer-1", 0)


class TestStats:
    async def test_aggregates_repositories(self) -> None:
        assets = AsyncMock()
        assets.count.side_effect = [3, 2]
        assets.average_yield_bps.return_value = 950
        listings = AsyncMock()
        listings.count.return_value = 5
        listings.count_active.return_value = 4
        trades = AsyncMock()
        trades.count.return_value = 9
        trades.volume_by_denomination.return_value = {"USDC": (10_000, 250)}
        distributions = AsyncMock()
        distributions.count.return_value = 1
        platform = AsyncMock()
        platform.get_fee_bps.return_value = 250
        svc = _make_service(
            assets=assets,
            listings=listings,
            trades=trades,
            distributions=distributions,
            platform=platform,
        )
        db = MagicMock()

        stats = await svc.get_stats(db)

        assert stats.total_assets == 3
        assert stats.tradeable_assets == 2
        assert stats.average_yield_bps == 950
        assert stats.active_listings == 4
        assert stats.total_trades == 9
        assert stats.total_distributions == 1
        assert stats.platform_fee_bps == 250
        assert stats.volume[0].payment_denomination == "USDC"
        assert stats.volume[0].fee_revenue == 250
        listings.count_active.assert_awaited_once_with(db, 1_700_000_000)
