"""Domain models for pk_revenue: distribution snapshot and its arithmetic."""

from dataclasses import dataclass

from src.pk_common.amounts import checked_mul, saturating_sub
from src.pk_common.enums import DistributionStatus


@dataclass
class RevenueDistribution:
    id: str
    asset_id: str
    period_start: int
    period_end: int
    total_revenue: int
    operating_costs: int
    net_revenue: int
    total_tokens_outstanding: int    # circulating_supply at creation, never recomputed
    revenue_per_token: int
    total_distributed: int
    distribution_status: str         # DistributionStatus value
    operator: str
    created_at: int
    completed_at: int | None = None

    @property
    def distributable(self) -> int:
        """revenue_per_token x outstanding; the remainder of net_revenue is dust."""
        return checked_mul(
            self.revenue_per_token, self.total_tokens_outstanding, "distributable revenue"
        )

    @property
    def dust(self) -> int:
        return self.net_revenue - self.distributable


def compute_net_revenue(total_revenue: int, operating_costs: int) -> int:
    """Net revenue never goes negative: costs above revenue give 0."""
    return saturating_sub(total_revenue, operating_costs)


def compute_revenue_per_token(net_revenue: int, total_tokens_outstanding: int) -> int:
    """Floor division; 0 when no tokens are outstanding."""
    if total_tokens_outstanding == 0:
        return 0
    return net_revenue // total_tokens_outstanding


# Reported by the external payout process. COMPLETED and FAILED are terminal.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    DistributionStatus.PENDING.value: frozenset(
        {DistributionStatus.PROCESSING.value, DistributionStatus.FAILED.value}
    ),
    DistributionStatus.PROCESSING.value: frozenset(
        {DistributionStatus.COMPLETED.value, DistributionStatus.FAILED.value}
    ),
    DistributionStatus.COMPLETED.value: frozenset(),
    DistributionStatus.FAILED.value: frozenset(),
}
