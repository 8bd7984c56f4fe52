"""Revenue distribution checks and status transitions."""

from src.pk_asset.domain.models import ParkingAsset
from src.pk_common.amounts import is_valid_amount
from src.pk_common.enums import DistributionStatus
from src.pk_common.errors import (
    AssetNotActiveError,
    DistributionAlreadyCompletedError,
    InvalidAmountError,
    InvalidDistributionTransitionError,
    InvalidRevenuePeriodError,
)
from src.pk_gateway.auth.signer import require_signer
from src.pk_revenue.domain.models import (
    ALLOWED_TRANSITIONS,
    RevenueDistribution,
    compute_net_revenue,
    compute_revenue_per_token,
)


def check_period(period_start: int, period_end: int, now: int) -> None:
    """A period must be non-empty and already over."""
    if not (period_start < period_end <= now):
        raise InvalidRevenuePeriodError(period_start, period_end)


def open_distribution(
    distribution_id: str,
    asset: ParkingAsset,
    operator: str,
    total_revenue: int,
    operating_costs: int,
    period_start: int,
    period_end: int,
    now: int,
) -> RevenueDistribution:
    """Validate and compute a PENDING distribution for one period."""
    require_signer(operator, asset.institutional_operator, "distribute revenue for this asset")
    if not asset.is_active:
        raise AssetNotActiveError(asset.id)
    check_period(period_start, period_end, now)
    for name, value in (("total_revenue", total_revenue), ("operating_costs", operating_costs)):
        if not is_valid_amount(value):
            raise InvalidAmountError(f"{name} must be in [0, 2**63-1], got {value}")

    outstanding = asset.circulating_supply
    net_revenue = compute_net_revenue(total_revenue, operating_costs)
    return RevenueDistribution(
        id=distribution_id,
        asset_id=asset.id,
        period_start=period_start,
        period_end=period_end,
        total_revenue=total_revenue,
        operating_costs=operating_costs,
        net_revenue=net_revenue,
        total_tokens_outstanding=outstanding,
        revenue_per_token=compute_revenue_per_token(net_revenue, outstanding),
        total_distributed=0,
        distribution_status=DistributionStatus.PENDING.value,
        operator=operator,
        created_at=now,
    )


def transition(
    distribution: RevenueDistribution,
    target: DistributionStatus,
    now: int,
    total_distributed: int | None = None,
) -> None:
    """Apply a payout status report.

    Reaching COMPLETED records completed_at and the amount actually paid out,
    which can never exceed the distributable revenue.
    """
    current = distribution.distribution_status
    target_value = DistributionStatus(target).value
    if current == DistributionStatus.COMPLETED.value:
        raise DistributionAlreadyCompletedError(distribution.id)
    if target_value not in ALLOWED_TRANSITIONS[current]:
        raise InvalidDistributionTransitionError(current, target_value)

    if target_value == DistributionStatus.COMPLETED.value:
        paid = distribution.distributable if total_distributed is None else total_distributed
        if not (0 <= paid <= distribution.distributable):
            raise InvalidAmountError(
                f"total_distributed {paid} outside [0, {distribution.distributable}]"
            )
        distribution.total_distributed = paid
        distribution.completed_at = now
    distribution.distribution_status = target_value
