"""Admin application service: platform fee, marketplace stats, payment-token issuance."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pk_admin.application.schemas import (
    MarketplaceStats,
    MintResponse,
    PlatformFeeResponse,
    VolumeItem,
)
from src.pk_admin.domain.repository import PlatformConfigProtocol
from src.pk_admin.infrastructure.platform_config import PlatformConfigRepository
from src.pk_asset.domain.repository import AssetRepositoryProtocol
from src.pk_asset.infrastructure.persistence import AssetRepository
from src.pk_common.amounts import is_valid_amount
from src.pk_common.datetime_utils import Clock, epoch_seconds
from src.pk_common.errors import InvalidAmountError, InvalidFeeError, UnsupportedPaymentTokenError
from src.pk_listing.domain.repository import ListingRepositoryProtocol
from src.pk_listing.infrastructure.persistence import ListingRepository
from src.pk_revenue.domain.repository import DistributionRepositoryProtocol
from src.pk_revenue.infrastructure.persistence import DistributionRepository
from src.pk_token.domain.repository import TokenLedgerProtocol
from src.pk_token.infrastructure.persistence import TokenLedgerRepository
from src.pk_trade.domain.repository import TradesRepositoryProtocol
from src.pk_trade.infrastructure.trades_repository import TradesRepository

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        platform: PlatformConfigProtocol | None = None,
        assets: AssetRepositoryProtocol | None = None,
        listings: ListingRepositoryProtocol | None = None,
        trades: TradesRepositoryProtocol | None = None,
        distributions: DistributionRepositoryProtocol | None = None,
        tokens: TokenLedgerProtocol | None = None,
        clock: Clock = epoch_seconds,
    ) -> None:
        self._platform: PlatformConfigProtocol = platform or PlatformConfigRepository()
        self._assets: AssetRepositoryProtocol = assets or AssetRepository()
        self._listings: ListingRepositoryProtocol = listings or ListingRepository()
        self._trades: TradesRepositoryProtocol = trades or TradesRepository()
        self._distributions: DistributionRepositoryProtocol = (
            distributions or DistributionRepository()
        )
        self._tokens: TokenLedgerProtocol = tokens or TokenLedgerRepository()
        self._clock = clock

    async def get_platform_fee(self, db: AsyncSession) -> PlatformFeeResponse:
        return PlatformFeeResponse(
            fee_bps=await self._platform.get_fee_bps(db),
            max_fee_bps=settings.MAX_PLATFORM_FEE_BPS,
            fee_account=settings.PLATFORM_FEE_ACCOUNT_ID,
        )

    async def update_platform_fee(self, db: AsyncSession, fee_bps: int) -> PlatformFeeResponse:
        if not (0 <= fee_bps <= settings.MAX_PLATFORM_FEE_BPS):
            raise InvalidFeeError(fee_bps, settings.MAX_PLATFORM_FEE_BPS)
        try:
            await self._platform.set_fee_bps(db, fee_bps)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Platform fee updated: %d bps", fee_bps)
        return PlatformFeeResponse(
            fee_bps=fee_bps,
            max_fee_bps=settings.MAX_PLATFORM_FEE_BPS,
            fee_account=settings.PLATFORM_FEE_ACCOUNT_ID,
        )

    async def mint_payment_token(
        self, db: AsyncSession, denomination: str, to: str, amount: int
    ) -> MintResponse:
        """Simulated deposit: issue a supported payment token to an account."""
        if denomination not in settings.SUPPORTED_PAYMENT_TOKENS:
            raise UnsupportedPaymentTokenError(denomination)
        if amount <= 0 or not is_valid_amount(amount):
            raise InvalidAmountError(f"mint amount must be in [1, 2**63-1], got {amount}")
        try:
            balance = await self._tokens.mint(db, denomination, to, amount, "DEPOSIT", None)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Payment token minted: %d %s to %s", amount, denomination, to)
        return MintResponse(
            denomination=denomination, to=to, amount=amount, balance_after=balance.balance
        )

    async def get_stats(self, db: AsyncSession) -> MarketplaceStats:
        volume = await self._trades.volume_by_denomination(db)
        return MarketplaceStats(
            total_assets=await self._assets.count(db),
            tradeable_assets=await self._assets.count(db, tradeable_only=True),
            average_yield_bps=await self._assets.average_yield_bps(db),
            total_listings=await self._listings.count(db),
            active_listings=await self._listings.count_active(db, self._clock()),
            total_trades=await self._trades.count(db),
            total_distributions=await self._distributions.count(db),
            platform_fee_bps=await self._platform.get_fee_bps(db),
            volume=[
                VolumeItem(payment_denomination=denom, volume=v, fee_revenue=f)
                for denom, (v, f) in volume.items()
            ],
        )
