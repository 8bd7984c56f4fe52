"""Pydantic schemas for pk_listing API."""

from pydantic import BaseModel, Field

from src.pk_common.datetime_utils import to_iso
from src.pk_common.enums import ListingType
from src.pk_listing.domain.models import MarketplaceListing

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateListingRequest(BaseModel):
    asset_id: str
    listing_type: ListingType = ListingType.SALE
    token_amount: int
    price_per_token: int
    payment_methods: list[str] = Field(..., description="Accepted payment denominations, 1-5")
    minimum_purchase: int = Field(0, description="Minimum purchase price in payment units")
    kyb_required: bool = False
    ttl_seconds: int = Field(..., ge=0, description="Listing lifetime from now, in seconds")


class BuyRequest(BaseModel):
    token_amount: int
    payment_denomination: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ListingDetail(BaseModel):
    id: str
    asset_id: str
    seller: str
    listing_type: str
    initial_token_amount: int
    token_amount: int
    filled_amount: int
    price_per_token: int
    total_price: int
    payment_methods: list[str]
    minimum_purchase: int
    kyb_required: bool
    status: str
    created_at: int
    expires_at: int
    expires_at_iso: str | None

    @classmethod
    def from_domain(cls, listing: MarketplaceListing) -> "ListingDetail":
        return cls(
            id=listing.id,
            asset_id=listing.asset_id,
            seller=listing.seller,
            listing_type=listing.listing_type,
            initial_token_amount=listing.initial_token_amount,
            token_amount=listing.token_amount,
            filled_amount=listing.filled_amount,
            price_per_token=listing.price_per_token,
            total_price=listing.total_price,
            payment_methods=listing.payment_methods,
            minimum_purchase=listing.minimum_purchase,
            kyb_required=listing.kyb_required,
            status=listing.status,
            created_at=listing.created_at,
            expires_at=listing.expires_at,
            expires_at_iso=to_iso(listing.expires_at),
        )


class ListingListResponse(BaseModel):
    items: list[ListingDetail]
    next_cursor: str | None
    has_more: bool


class BuyResponse(BaseModel):
    trade_id: str
    listing_id: str
    token_amount: int
    purchase_price: int
    platform_fee: int
    seller_proceeds: int
    payment_denomination: str
    remaining_token_amount: int
    listing_status: str


class ValidityResponse(BaseModel):
    listing_id: str
    is_valid: bool
