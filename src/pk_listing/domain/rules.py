"""Listing state machine.

ACTIVE -> SOLD       remaining token_amount reaches zero
ACTIVE -> CANCELLED  seller action
ACTIVE -> EXPIRED    expires_at <= now, observed lazily on the next buy

SOLD, CANCELLED and EXPIRED are terminal. The purchase checks run in a fixed
order and each assumes the previous ones passed.
"""

from src.pk_asset.domain.models import ParkingAsset
from src.pk_asset.domain.rules import check_listable
from src.pk_common.amounts import checked_add, checked_mul, is_valid_amount
from src.pk_common.enums import ListingStatus, ListingType
from src.pk_common.errors import (
    InsufficientTokensError,
    InvalidAmountError,
    InvalidPaymentMethodsError,
    InvalidPriceError,
    KYBRequiredError,
    ListingExpiredError,
    ListingNotActiveError,
    MinimumPurchaseNotMetError,
    PaymentMethodNotAcceptedError,
)
from src.pk_listing.domain.fee import calc_platform_fee
from src.pk_listing.domain.models import MarketplaceListing, PurchaseQuote

MAX_PAYMENT_METHODS = 5


def check_payment_methods(payment_methods: list[str]) -> None:
    if not payment_methods:
        raise InvalidPaymentMethodsError("at least one payment method is required")
    if len(payment_methods) > MAX_PAYMENT_METHODS:
        raise InvalidPaymentMethodsError(
            f"{len(payment_methods)} given, at most {MAX_PAYMENT_METHODS} allowed"
        )
    if len(set(payment_methods)) != len(payment_methods):
        raise InvalidPaymentMethodsError("duplicate payment methods")


def open_listing(
    listing_id: str,
    asset: ParkingAsset,
    seller: str,
    listing_type: ListingType,
    token_amount: int,
    price_per_token: int,
    payment_methods: list[str],
    minimum_purchase: int,
    kyb_required: bool,
    ttl_seconds: int,
    now: int,
    require_compliance: bool = False,
) -> MarketplaceListing:
    """Validate a new listing and build it in the ACTIVE state."""
    check_listable(asset, require_compliance)
    if token_amount <= 0:
        raise InvalidAmountError(f"listing token_amount must be positive, got {token_amount}")
    if price_per_token <= 0:
        raise InvalidPriceError(price_per_token)
    check_payment_methods(payment_methods)
    total_price = checked_mul(token_amount, price_per_token, "total_price")
    if not is_valid_amount(minimum_purchase):
        raise InvalidAmountError(
            f"minimum_purchase must be in [0, 2**63-1], got {minimum_purchase}"
        )
    if ttl_seconds < 0:
        raise InvalidAmountError(f"ttl_seconds must not be negative, got {ttl_seconds}")

    return MarketplaceListing(
        id=listing_id,
        asset_id=asset.id,
        seller=seller,
        listing_type=ListingType(listing_type).value,
        initial_token_amount=token_amount,
        token_amount=token_amount,
        price_per_token=price_per_token,
        total_price=total_price,
        payment_methods=list(payment_methods),
        minimum_purchase=minimum_purchase,
        kyb_required=kyb_required,
        status=ListingStatus.ACTIVE.value,
        created_at=now,
        expires_at=checked_add(now, ttl_seconds, "expires_at"),
    )


def check_purchase(
    listing: MarketplaceListing,
    token_amount: int,
    payment_denomination: str,
    kyb_verified: bool,
    now: int,
    fee_bps: int,
) -> PurchaseQuote:
    """Run the purchase checks in order and price the fill.

    Raises ListingExpiredError for a listing past its expiry without
    touching it; the caller persists the EXPIRED transition (see expire()).
    A listing already stored as EXPIRED fails the same way again.
    """
    if listing.status == ListingStatus.EXPIRED.value:
        raise ListingExpiredError(listing.id)
    if listing.status != ListingStatus.ACTIVE.value:
        raise ListingNotActiveError(listing.id, listing.status)
    if listing.is_expired(now):
        raise ListingExpiredError(listing.id)
    if listing.kyb_required and not kyb_verified:
        raise KYBRequiredError()
    if token_amount <= 0:
        raise InvalidAmountError(f"purchase token_amount must be positive, got {token_amount}")
    if token_amount > listing.token_amount:
        raise InsufficientTokensError(token_amount, listing.token_amount)

    purchase_price = checked_mul(token_amount, listing.price_per_token, "purchase_price")
    if purchase_price < listing.minimum_purchase:
        raise MinimumPurchaseNotMetError(purchase_price, listing.minimum_purchase)
    if not listing.accepts_payment_method(payment_denomination):
        raise PaymentMethodNotAcceptedError(payment_denomination)

    fee = calc_platform_fee(purchase_price, fee_bps)
    return PurchaseQuote(
        token_amount=token_amount,
        purchase_price=purchase_price,
        platform_fee=fee,
        seller_proceeds=purchase_price - fee,
        payment_denomination=payment_denomination,
    )


def needs_expiry(listing: MarketplaceListing, now: int) -> bool:
    """True when a buy must persist ACTIVE -> EXPIRED before failing."""
    return listing.status == ListingStatus.ACTIVE.value and listing.is_expired(now)


def expire(listing: MarketplaceListing) -> None:
    listing.status = ListingStatus.EXPIRED.value


def apply_fill(listing: MarketplaceListing, token_amount: int) -> None:
    """Decrement the remaining amount; the last fill moves the listing to SOLD."""
    listing.token_amount -= token_amount
    if listing.token_amount == 0:
        listing.status = ListingStatus.SOLD.value


def cancel(listing: MarketplaceListing) -> None:
    if listing.status != ListingStatus.ACTIVE.value:
        raise ListingNotActiveError(listing.id, listing.status)
    listing.status = ListingStatus.CANCELLED.value
