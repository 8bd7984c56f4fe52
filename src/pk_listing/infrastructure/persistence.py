"""ListingRepository: concrete implementation of ListingRepositoryProtocol.

payment_methods is a TEXT[] column; asyncpg maps it to list[str] both ways.
"Active" in queries means stored status ACTIVE *and* expires_at > now, since
expiry is only written back lazily by the next buy attempt.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_listing.domain.models import MarketplaceListing

_COLUMNS = """
    id, asset_id, seller, listing_type, initial_token_amount, token_amount,
    price_per_token, total_price, payment_methods, minimum_purchase,
    kyb_required, status, created_at, expires_at
"""

_INSERT_SQL = text(f"""
    INSERT INTO marketplace_listings ({_COLUMNS})
    VALUES (
        :id, :asset_id, :seller, :listing_type, :initial_token_amount, :token_amount,
        :price_per_token, :total_price, :payment_methods, :minimum_purchase,
        :kyb_required, :status, :created_at, :expires_at
    )
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM marketplace_listings WHERE id = :listing_id")

_GET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM marketplace_listings WHERE id = :listing_id FOR UPDATE"
)

_UPDATE_STATE_SQL = text("""
    UPDATE marketplace_listings
    SET token_amount = :token_amount,
        status = :status,
        updated_at = NOW()
    WHERE id = :listing_id
""")

_LIST_ACTIVE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM marketplace_listings
    WHERE status = 'ACTIVE' AND expires_at > :now
      AND (CAST(:asset_id AS TEXT) IS NULL OR asset_id = CAST(:asset_id AS TEXT))
      AND (CAST(:cursor_id AS TEXT) IS NULL OR id < CAST(:cursor_id AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")

_COUNT_SQL = text("SELECT COUNT(*) FROM marketplace_listings")

_COUNT_ACTIVE_SQL = text("""
    SELECT COUNT(*) FROM marketplace_listings
    WHERE status = 'ACTIVE' AND expires_at > :now
""")


def _row_to_listing(row: object) -> MarketplaceListing:
    return MarketplaceListing(
        id=row.id,  # type: ignore[attr-defined]
        asset_id=row.asset_id,  # type: ignore[attr-defined]
        seller=row.seller,  # type: ignore[attr-defined]
        listing_type=row.listing_type,  # type: ignore[attr-defined]
        initial_token_amount=row.initial_token_amount,  # type: ignore[attr-defined]
        token_amount=row.token_amount,  # type: ignore[attr-defined]
        price_per_token=row.price_per_token,  # type: ignore[attr-defined]
        total_price=row.total_price,  # type: ignore[attr-defined]
        payment_methods=list(row.payment_methods),  # type: ignore[attr-defined]
        minimum_purchase=row.minimum_purchase,  # type: ignore[attr-defined]
        kyb_required=row.kyb_required,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        expires_at=row.expires_at,  # type: ignore[attr-defined]
    )


class ListingRepository:
    async def insert(self, db: AsyncSession, listing: MarketplaceListing) -> None:
        await db.execute(
            _INSERT_SQL,
            {
                "id": listing.id,
                "asset_id": listing.asset_id,
                "seller": listing.seller,
                "listing_type": listing.listing_type,
                "initial_token_amount": listing.initial_token_amount,
                "token_amount": listing.token_amount,
                "price_per_token": listing.price_per_token,
                "total_price": listing.total_price,
                "payment_methods": listing.payment_methods,
                "minimum_purchase": listing.minimum_purchase,
                "kyb_required": listing.kyb_required,
                "status": listing.status,
                "created_at": listing.created_at,
                "expires_at": listing.expires_at,
            },
        )

    async def get_by_id(self, db: AsyncSession, listing_id: str) -> MarketplaceListing | None:
        row = (await db.execute(_GET_SQL, {"listing_id": listing_id})).fetchone()
        return _row_to_listing(row) if row else None

    async def get_for_update(
        self, db: AsyncSession, listing_id: str
    ) -> MarketplaceListing | None:
        row = (await db.execute(_GET_FOR_UPDATE_SQL, {"listing_id": listing_id})).fetchone()
        return _row_to_listing(row) if row else None

    async def update_state(self, db: AsyncSession, listing: MarketplaceListing) -> None:
        await db.execute(
            _UPDATE_STATE_SQL,
            {
                "listing_id": listing.id,
                "token_amount": listing.token_amount,
                "status": listing.status,
            },
        )

    async def list_active(
        self,
        db: AsyncSession,
        now: int,
        asset_id: str | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[MarketplaceListing]:
        result = await db.execute(
            _LIST_ACTIVE_SQL,
            {"now": now, "asset_id": asset_id, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_listing(row) for row in result.fetchall()]

    async def count(self, db: AsyncSession) -> int:
        return int((await db.execute(_COUNT_SQL)).scalar_one())

    async def count_active(self, db: AsyncSession, now: int) -> int:
        return int((await db.execute(_COUNT_ACTIVE_SQL, {"now": now})).scalar_one())
