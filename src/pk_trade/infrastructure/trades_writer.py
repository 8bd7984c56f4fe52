"""Persist a single trade row to the trades table."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_trade.domain.models import Trade

_INSERT_TRADE_SQL = text("""
    INSERT INTO trades (
        id, listing_id, asset_id,
        buyer, seller,
        token_amount, price_paid,
        platform_fee, seller_proceeds,
        payment_denomination, traded_at
    ) VALUES (
        :id, :listing_id, :asset_id,
        :buyer, :seller,
        :token_amount, :price_paid,
        :platform_fee, :seller_proceeds,
        :payment_denomination, :traded_at
    )
""")


async def write_trade(db: AsyncSession, trade: Trade) -> None:
    """Insert one row into the trades table."""
    await db.execute(
        _INSERT_TRADE_SQL,
        {
            "id": trade.id,
            "listing_id": trade.listing_id,
            "asset_id": trade.asset_id,
            "buyer": trade.buyer,
            "seller": trade.seller,
            "token_amount": trade.token_amount,
            "price_paid": trade.price_paid,
            "platform_fee": trade.platform_fee,
            "seller_proceeds": trade.seller_proceeds,
            "payment_denomination": trade.payment_denomination,
            "traded_at": trade.traded_at,
        },
    )
