"""Domain model for pk_trade: one immutable executed purchase."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Trade:
    id: str
    listing_id: str
    asset_id: str
    buyer: str
    seller: str
    token_amount: int
    price_paid: int                  # purchase_price, fee included
    platform_fee: int
    seller_proceeds: int             # price_paid - platform_fee
    payment_denomination: str
    traded_at: int                   # Unix seconds
