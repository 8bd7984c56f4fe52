"""Tokenization preconditions. Each check raises the matching AppError."""

from src.pk_asset.domain.models import ParkingAsset
from src.pk_common.amounts import BPS_DENOMINATOR, is_valid_amount
from src.pk_common.enums import ComplianceStatus
from src.pk_common.errors import (
    AssetNotActiveError,
    AssetNotTradeableError,
    ComplianceNotMetError,
    InvalidAmountError,
    InvalidLabelError,
    InvalidRevenueSharePercentageError,
)

MAX_SPOT_LABEL_BYTES = 32

_COMPLIANT_STATUSES = frozenset({ComplianceStatus.VERIFIED.value, ComplianceStatus.COMPLIANT.value})


def check_total_supply(total_supply: int) -> None:
    if total_supply <= 0 or not is_valid_amount(total_supply):
        raise InvalidAmountError(f"total_supply must be in [1, 2**63-1], got {total_supply}")


def check_parking_lot_id(parking_lot_id: int) -> None:
    """Stored as BIGINT alongside the label; part of the asset id seed."""
    if not is_valid_amount(parking_lot_id):
        raise InvalidAmountError(f"parking_lot_id must be in [0, 2**63-1], got {parking_lot_id}")


def check_spot_label(spot_label: str) -> None:
    """The label limit is in UTF-8 bytes, not characters."""
    length = len(spot_label.encode("utf-8"))
    if length > MAX_SPOT_LABEL_BYTES:
        raise InvalidLabelError(length, MAX_SPOT_LABEL_BYTES)


def check_revenue_share(revenue_share_bps: int) -> None:
    if not (0 <= revenue_share_bps <= BPS_DENOMINATOR):
        raise InvalidRevenueSharePercentageError(revenue_share_bps)


def check_valuation(estimated_value: int, annual_revenue: int) -> None:
    for name, value in (("estimated_value", estimated_value), ("annual_revenue", annual_revenue)):
        if not is_valid_amount(value):
            raise InvalidAmountError(f"{name} must be in [0, 2**63-1], got {value}")


def validate_tokenization(
    spot_label: str,
    total_supply: int,
    estimated_value: int,
    annual_revenue: int,
    revenue_share_bps: int,
) -> None:
    """Run every tokenization check in order: supply, label, share, valuation."""
    check_total_supply(total_supply)
    check_spot_label(spot_label)
    check_revenue_share(revenue_share_bps)
    check_valuation(estimated_value, annual_revenue)


def check_listable(asset: ParkingAsset, require_compliance: bool = False) -> None:
    """An asset can back a new listing only while active and tradeable."""
    if not asset.is_active:
        raise AssetNotActiveError(asset.id)
    if not asset.is_tradeable:
        raise AssetNotTradeableError(asset.id)
    if require_compliance and asset.compliance_status not in _COMPLIANT_STATUSES:
        raise ComplianceNotMetError(asset.id, asset.compliance_status)


def check_tradeable(asset: ParkingAsset) -> None:
    """Purchase-time re-check against the freshly locked asset row."""
    if not asset.is_tradeable:
        raise AssetNotTradeableError(asset.id)
