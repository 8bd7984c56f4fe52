"""Domain models for pk_listing: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field

from src.pk_common.enums import ListingStatus


@dataclass
class MarketplaceListing:
    id: str
    asset_id: str
    seller: str
    listing_type: str                # ListingType value
    initial_token_amount: int
    token_amount: int                # remaining, decreases on each fill
    price_per_token: int
    total_price: int                 # initial_token_amount * price_per_token, snapshot
    payment_methods: list[str] = field(default_factory=list)
    minimum_purchase: int = 0        # in payment-token units
    kyb_required: bool = False
    status: str = ListingStatus.ACTIVE.value
    created_at: int = 0              # Unix seconds
    expires_at: int = 0              # Unix seconds

    def is_expired(self, now: int) -> bool:
        return self.expires_at <= now

    def is_valid(self, now: int) -> bool:
        """Open for purchases: stored status ACTIVE and not past expiry."""
        return self.status == ListingStatus.ACTIVE.value and not self.is_expired(now)

    def accepts_payment_method(self, denomination: str) -> bool:
        return denomination in self.payment_methods

    @property
    def filled_amount(self) -> int:
        return self.initial_token_amount - self.token_amount


@dataclass
class PurchaseQuote:
    """Result of a validated purchase, before any token moves."""

    token_amount: int
    purchase_price: int
    platform_fee: int
    seller_proceeds: int
    payment_denomination: str
