"""Pydantic schemas for pk_revenue API."""

from pydantic import BaseModel

from src.pk_common.datetime_utils import to_iso
from src.pk_common.enums import DistributionStatus
from src.pk_revenue.domain.models import RevenueDistribution


class DistributeRequest(BaseModel):
    total_revenue: int
    operating_costs: int
    period_start: int
    period_end: int


class ReportStatusRequest(BaseModel):
    status: DistributionStatus
    # Only read when status is COMPLETED; defaults to the full distributable amount.
    total_distributed: int | None = None


class DistributionDetail(BaseModel):
    id: str
    asset_id: str
    period_start: int
    period_end: int
    total_revenue: int
    operating_costs: int
    net_revenue: int
    total_tokens_outstanding: int
    revenue_per_token: int
    distributable: int
    dust: int
    total_distributed: int
    distribution_status: str
    operator: str
    created_at: int
    completed_at: int | None
    completed_at_iso: str | None

    @classmethod
    def from_domain(cls, d: RevenueDistribution) -> "DistributionDetail":
        return cls(
            id=d.id,
            asset_id=d.asset_id,
            period_start=d.period_start,
            period_end=d.period_end,
            total_revenue=d.total_revenue,
            operating_costs=d.operating_costs,
            net_revenue=d.net_revenue,
            total_tokens_outstanding=d.total_tokens_outstanding,
            revenue_per_token=d.revenue_per_token,
            distributable=d.distributable,
            dust=d.dust,
            total_distributed=d.total_distributed,
            distribution_status=d.distribution_status,
            operator=d.operator,
            created_at=d.created_at,
            completed_at=d.completed_at,
            completed_at_iso=to_iso(d.completed_at),
        )


class DistributionListResponse(BaseModel):
    items: list[DistributionDetail]
    next_cursor: str | None
    has_more: bool
