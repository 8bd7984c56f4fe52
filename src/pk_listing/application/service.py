"""ListingApplicationService: listing creation, purchase and cancellation.

Each write runs in one transaction on the request session. A purchase locks
the listing row, then the asset row, in that order; concurrent buyers of the
same listing serialize on the first lock.

The only failing call that commits is a buy against an ACTIVE listing whose
expiry has passed: the EXPIRED transition is committed, then
ListingExpiredError is raised.
"""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pk_admin.domain.repository import PlatformConfigProtocol
from src.pk_admin.infrastructure.platform_config import PlatformConfigRepository
from src.pk_asset.domain.repository import AssetRepositoryProtocol
from src.pk_asset.domain.rules import check_tradeable
from src.pk_asset.infrastructure.persistence import AssetRepository
from src.pk_common.datetime_utils import Clock, epoch_seconds
from src.pk_common.enums import ListingType
from src.pk_common.errors import AssetNotFoundError, ListingExpiredError, ListingNotFoundError
from src.pk_common.id_generator import generate_id
from src.pk_gateway.auth.signer import require_signer
from src.pk_listing.application.schemas import (
    BuyResponse,
    ListingDetail,
    ListingListResponse,
    ValidityResponse,
)
from src.pk_listing.domain.models import MarketplaceListing
from src.pk_listing.domain.repository import ListingRepositoryProtocol
from src.pk_listing.domain.rules import (
    apply_fill,
    cancel,
    check_purchase,
    expire,
    needs_expiry,
    open_listing,
)
from src.pk_listing.infrastructure.persistence import ListingRepository
from src.pk_token.domain.repository import TokenLedgerProtocol
from src.pk_token.infrastructure.persistence import TokenLedgerRepository
from src.pk_trade.domain.models import Trade
from src.pk_trade.domain.repository import TradesRepositoryProtocol
from src.pk_trade.infrastructure.trades_repository import TradesRepository

logger = logging.getLogger(__name__)


class ListingApplicationService:
    def __init__(
        self,
        repo: ListingRepositoryProtocol | None = None,
        assets: AssetRepositoryProtocol | None = None,
        tokens: TokenLedgerProtocol | None = None,
        trades: TradesRepositoryProtocol | None = None,
        platform: PlatformConfigProtocol | None = None,
        clock: Clock = epoch_seconds,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._repo: ListingRepositoryProtocol = repo or ListingRepository()
        self._assets: AssetRepositoryProtocol = assets or AssetRepository()
        self._tokens: TokenLedgerProtocol = tokens or TokenLedgerRepository()
        self._trades: TradesRepositoryProtocol = trades or TradesRepository()
        self._platform: PlatformConfigProtocol = platform or PlatformConfigRepository()
        self._clock = clock
        self._new_id = id_factory

    async def create_listing(
        self,
        db: AsyncSession,
        seller: str,
        asset_id: str,
        listing_type: ListingType,
        token_amount: int,
        price_per_token: int,
        payment_methods: list[str],
        minimum_purchase: int,
        kyb_required: bool,
        ttl_seconds: int,
    ) -> ListingDetail:
        try:
            asset = await self._assets.get_by_id(db, asset_id)
            if asset is None:
                raise AssetNotFoundError(asset_id)
            listing = open_listing(
                self._new_id(),
                asset,
                seller,
                listing_type,
                token_amount,
                price_per_token,
                payment_methods,
                minimum_purchase,
                kyb_required,
                ttl_seconds,
                self._clock(),
                require_compliance=settings.REQUIRE_COMPLIANCE_FOR_LISTING,
            )
            await self._repo.insert(db, listing)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Listing created: id=%s asset=%s seller=%s amount=%d price=%d expires_at=%d",
            listing.id, asset_id, seller, token_amount, price_per_token, listing.expires_at,
        )
        return ListingDetail.from_domain(listing)

    async def buy(
        self,
        db: AsyncSession,
        buyer: str,
        listing_id: str,
        token_amount: int,
        payment_denomination: str,
        kyb_verified: bool,
    ) -> BuyResponse:
        now = self._clock()
        expired = False
        try:
            listing = await self._repo.get_for_update(db, listing_id)
            if listing is None:
                raise ListingNotFoundError(listing_id)
            if needs_expiry(listing, now):
                expire(listing)
                await self._repo.update_state(db, listing)
                await db.commit()
                expired = True
            else:
                trade = await self._execute_purchase(
                    db, listing, buyer, token_amount, payment_denomination, kyb_verified, now
                )
                await db.commit()
        except Exception:
            await db.rollback()
            raise

        if expired:
            logger.info("Listing expired on purchase attempt: id=%s buyer=%s", listing_id, buyer)
            raise ListingExpiredError(listing_id)

        logger.info(
            "Purchase executed: trade=%s listing=%s buyer=%s amount=%d price=%d fee=%d %s",
            trade.id, listing.id, buyer, trade.token_amount, trade.price_paid,
            trade.platform_fee, trade.payment_denomination,
        )
        return BuyResponse(
            trade_id=trade.id,
            listing_id=listing.id,
            token_amount=trade.token_amount,
            purchase_price=trade.price_paid,
            platform_fee=trade.platform_fee,
            seller_proceeds=trade.seller_proceeds,
            payment_denomination=trade.payment_denomination,
            remaining_token_amount=listing.token_amount,
            listing_status=listing.status,
        )

    async def _execute_purchase(
        self,
        db: AsyncSession,
        listing: MarketplaceListing,
        buyer: str,
        token_amount: int,
        payment_denomination: str,
        kyb_verified: bool,
        now: int,
    ) -> Trade:
        fee_bps = await self._platform.get_fee_bps(db)
        quote = check_purchase(
            listing, token_amount, payment_denomination, kyb_verified, now, fee_bps
        )

        # Tradeability may have changed since the listing was created.
        asset = await self._assets.get_for_update(db, listing.asset_id)
        if asset is None:
            raise AssetNotFoundError(listing.asset_id)
        check_tradeable(asset)

        trade_id = self._new_id()
        await self._tokens.transfer(
            db, payment_denomination, buyer, listing.seller,
            quote.seller_proceeds, "TRADE", trade_id,
        )
        if quote.platform_fee > 0:
            await self._tokens.transfer(
                db, payment_denomination, buyer, settings.PLATFORM_FEE_ACCOUNT_ID,
                quote.platform_fee, "TRADE", trade_id, fee=True,
            )
        await self._tokens.transfer(
            db, asset.token_denomination, listing.seller, buyer,
            quote.token_amount, "TRADE", trade_id,
        )

        apply_fill(listing, quote.token_amount)
        await self._repo.update_state(db, listing)

        trade = Trade(
            id=trade_id,
            listing_id=listing.id,
            asset_id=listing.asset_id,
            buyer=buyer,
            seller=listing.seller,
            token_amount=quote.token_amount,
            price_paid=quote.purchase_price,
            platform_fee=quote.platform_fee,
            seller_proceeds=quote.seller_proceeds,
            payment_denomination=payment_denomination,
            traded_at=now,
        )
        await self._trades.insert(db, trade)
        return trade

    async def cancel_listing(
        self, db: AsyncSession, caller: str, listing_id: str
    ) -> ListingDetail:
        try:
            listing = await self._repo.get_for_update(db, listing_id)
            if listing is None:
                raise ListingNotFoundError(listing_id)
            require_signer(caller, listing.seller, "cancel this listing")
            cancel(listing)
            await self._repo.update_state(db, listing)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Listing cancelled: id=%s seller=%s", listing_id, caller)
        return ListingDetail.from_domain(listing)

    async def get_listing(self, db: AsyncSession, listing_id: str) -> ListingDetail:
        listing = await self._repo.get_by_id(db, listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        return ListingDetail.from_domain(listing)

    async def is_listing_valid(self, db: AsyncSession, listing_id: str) -> ValidityResponse:
        listing = await self._repo.get_by_id(db, listing_id)
        is_valid = listing is not None and listing.is_valid(self._clock())
        return ValidityResponse(listing_id=listing_id, is_valid=is_valid)

    async def list_active(
        self,
        db: AsyncSession,
        asset_id: str | None,
        cursor: str | None,
        limit: int,
    ) -> ListingListResponse:
        # Fetch limit+1 to detect has_more without COUNT(*)
        listings = await self._repo.list_active(db, self._clock(), asset_id, cursor, limit + 1)
        has_more = len(listings) > limit
        page = listings[:limit]
        return ListingListResponse(
            items=[ListingDetail.from_domain(listing) for listing in page],
            next_cursor=page[-1].id if has_more and page else None,
            has_more=has_more,
        )
