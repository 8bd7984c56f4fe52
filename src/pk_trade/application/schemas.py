"""Pydantic schemas for trades API."""

from pydantic import BaseModel

from src.pk_common.datetime_utils import to_iso
from src.pk_trade.domain.models import Trade


class TradeResponse(BaseModel):
    trade_id: str
    listing_id: str
    asset_id: str
    buyer: str
    seller: str
    token_amount: int
    price_paid: int
    platform_fee: int
    seller_proceeds: int
    payment_denomination: str
    traded_at: int
    traded_at_iso: str | None

    @classmethod
    def from_domain(cls, trade: Trade) -> "TradeResponse":
        return cls(
            trade_id=trade.id,
            listing_id=trade.listing_id,
            asset_id=trade.asset_id,
            buyer=trade.buyer,
            seller=trade.seller,
            token_amount=trade.token_amount,
            price_paid=trade.price_paid,
            platform_fee=trade.platform_fee,
            seller_proceeds=trade.seller_proceeds,
            payment_denomination=trade.payment_denomination,
            traded_at=trade.traded_at,
            traded_at_iso=to_iso(trade.traded_at),
        )


class TradeListResponse(BaseModel):
    items: list[TradeResponse]
    has_more: bool
    next_cursor: str | None
