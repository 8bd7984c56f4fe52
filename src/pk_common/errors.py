"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth / signer
  2xxx: Token balances
  3xxx: Asset registry
  4xxx: Listings / purchases
  5xxx: Revenue distribution
  6xxx: Platform admin
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth / signer ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid or expired access token", 401)


class UnauthorizedError(AppError):
    def __init__(self, caller: str, action: str) -> None:
        super().__init__(1006, f"Caller {caller} is not authorized to {action}", 403)


# --- 2xxx: Token balances ---

class InsufficientBalanceError(AppError):
    def __init__(self, denomination: str, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient {denomination} balance: required {required}, available {available}",
            422,
        )


class UnsupportedPaymentTokenError(AppError):
    def __init__(self, denomination: str) -> None:
        super().__init__(2002, f"Unsupported payment token: {denomination}", 422)


# --- 3xxx: Asset registry ---

class AssetNotFoundError(AppError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(3001, f"Asset not found: {asset_id}", 404)


class AssetNotActiveError(AppError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(3002, f"Asset is not active: {asset_id}", 422)


class AssetNotTradeableError(AppError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(3003, f"Asset is not tradeable: {asset_id}", 422)


class InvalidAmountError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, f"Invalid token amount: {detail}", 422)


class InvalidLabelError(AppError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(3005, f"Spot label is {length} bytes, limit is {limit}", 422)


class InvalidRevenueSharePercentageError(AppError):
    def __init__(self, bps: int) -> None:
        super().__init__(3006, f"Revenue share exceeds 100%: {bps} bps", 422)


class AssetAlreadyTokenizedError(AppError):
    def __init__(self, parking_lot_id: int, spot_label: str) -> None:
        super().__init__(
            3007, f"Spot {spot_label!r} of lot {parking_lot_id} is already tokenized", 409
        )


class ComplianceNotMetError(AppError):
    def __init__(self, asset_id: str, status: str) -> None:
        super().__init__(3008, f"Asset {asset_id} compliance status is {status}", 422)


# --- 4xxx: Listings / purchases ---

class ListingNotFoundError(AppError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(4001, f"Listing not found: {listing_id}", 404)


class ListingNotActiveError(AppError):
    def __init__(self, listing_id: str, status: str) -> None:
        super().__init__(4002, f"Listing {listing_id} is not active (status={status})", 422)


class ListingExpiredError(AppError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(4003, f"Listing has expired: {listing_id}", 422)


class KYBRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(4004, "KYB verification required", 403)


class InsufficientTokensError(AppError):
    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(
            4005, f"Requested {requested} tokens, only {remaining} remain on listing", 422
        )


class MinimumPurchaseNotMetError(AppError):
    def __init__(self, purchase_price: int, minimum: int) -> None:
        super().__init__(
            4006, f"Purchase price {purchase_price} is below minimum {minimum}", 422
        )


class PaymentMethodNotAcceptedError(AppError):
    def __init__(self, denomination: str) -> None:
        super().__init__(4007, f"Payment method not accepted: {denomination}", 422)


class InvalidPriceError(AppError):
    def __init__(self, price: int) -> None:
        super().__init__(4008, f"Invalid price per token: {price}", 422)


class InvalidPaymentMethodsError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4009, f"Invalid payment methods: {detail}", 422)


class TradeNotFoundError(AppError):
    def __init__(self, trade_id: str) -> None:
        super().__init__(4010, f"Trade not found: {trade_id}", 404)


# --- 5xxx: Revenue distribution ---

class DistributionNotFoundError(AppError):
    def __init__(self, distribution_id: str) -> None:
        super().__init__(5001, f"Distribution not found: {distribution_id}", 404)


class InvalidRevenuePeriodError(AppError):
    def __init__(self, period_start: int, period_end: int) -> None:
        super().__init__(
            5002, f"Invalid revenue period: start={period_start} end={period_end}", 422
        )


class DistributionAlreadyCompletedError(AppError):
    def __init__(self, distribution_id: str) -> None:
        super().__init__(5003, f"Distribution already completed: {distribution_id}", 409)


class InvalidDistributionTransitionError(AppError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(5004, f"Cannot move distribution from {current} to {target}", 422)


# --- 6xxx: Platform admin ---

class InvalidFeeError(AppError):
    def __init__(self, fee_bps: int, limit: int) -> None:
        super().__init__(6001, f"Platform fee {fee_bps} bps exceeds limit {limit} bps", 422)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class ArithmeticOverflowError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Arithmetic overflow: {detail}", 422)
