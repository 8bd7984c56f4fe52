"""TradesRepository: trade ledger queries, caller perspective for listing."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_trade.domain.models import Trade
from src.pk_trade.infrastructure.trades_writer import write_trade

_COLUMNS = """
    id, listing_id, asset_id, buyer, seller, token_amount, price_paid,
    platform_fee, seller_proceeds, payment_denomination, traded_at
"""

_GET_SQL = text(f"SELECT {_COLUMNS} FROM trades WHERE id = :trade_id")

_LIST_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM trades
    WHERE (buyer = :identity OR seller = :identity)
      AND (CAST(:listing_id AS TEXT) IS NULL OR listing_id = CAST(:listing_id AS TEXT))
      AND (CAST(:cursor_id AS TEXT) IS NULL OR id < CAST(:cursor_id AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")

_COUNT_SQL = text("SELECT COUNT(*) FROM trades")

_VOLUME_SQL = text("""
    SELECT payment_denomination,
           COALESCE(SUM(price_paid), 0) AS volume,
           COALESCE(SUM(platform_fee), 0) AS fees
    FROM trades
    GROUP BY payment_denomination
    ORDER BY payment_denomination
""")


def _row_to_trade(row: object) -> Trade:
    return Trade(
        id=row.id,  # type: ignore[attr-defined]
        listing_id=row.listing_id,  # type: ignore[attr-defined]
        asset_id=row.asset_id,  # type: ignore[attr-defined]
        buyer=row.buyer,  # type: ignore[attr-defined]
        seller=row.seller,  # type: ignore[attr-defined]
        token_amount=row.token_amount,  # type: ignore[attr-defined]
        price_paid=row.price_paid,  # type: ignore[attr-defined]
        platform_fee=row.platform_fee,  # type: ignore[attr-defined]
        seller_proceeds=row.seller_proceeds,  # type: ignore[attr-defined]
        payment_denomination=row.payment_denomination,  # type: ignore[attr-defined]
        traded_at=row.traded_at,  # type: ignore[attr-defined]
    )


class TradesRepository:
    async def insert(self, db: AsyncSession, trade: Trade) -> None:
        await write_trade(db, trade)

    async def get_by_id(self, db: AsyncSession, trade_id: str) -> Trade | None:
        row = (await db.execute(_GET_SQL, {"trade_id": trade_id})).fetchone()
        return _row_to_trade(row) if row else None

    async def list_by_party(
        self,
        db: AsyncSession,
        identity: str,
        listing_id: str | None,
        limit: int,
        cursor_id: str | None,
    ) -> list[Trade]:
        rows = (
            await db.execute(
                _LIST_SQL,
                {
                    "identity": identity,
                    "listing_id": listing_id,
                    "limit": limit,
                    "cursor_id": cursor_id,
                },
            )
        ).fetchall()
        return [_row_to_trade(r) for r in rows]

    async def count(self, db: AsyncSession) -> int:
        return int((await db.execute(_COUNT_SQL)).scalar_one())

    async def volume_by_denomination(self, db: AsyncSession) -> dict[str, tuple[int, int]]:
        rows = (await db.execute(_VOLUME_SQL)).fetchall()
        return {r.payment_denomination: (int(r.volume), int(r.fees)) for r in rows}
