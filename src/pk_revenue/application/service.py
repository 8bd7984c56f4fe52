"""RevenueApplicationService: per-period revenue snapshots for an asset.

The payout to individual holders happens outside this service; it only
records the per-token entitlement and the payout process's status reports.
"""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_asset.domain.repository import AssetRepositoryProtocol
from src.pk_asset.infrastructure.persistence import AssetRepository
from src.pk_common.datetime_utils import Clock, epoch_seconds
from src.pk_common.enums import DistributionStatus
from src.pk_common.errors import AssetNotFoundError, DistributionNotFoundError
from src.pk_common.id_generator import generate_id
from src.pk_gateway.auth.signer import require_signer
from src.pk_revenue.application.schemas import DistributionDetail, DistributionListResponse
from src.pk_revenue.domain.repository import DistributionRepositoryProtocol
from src.pk_revenue.domain.rules import open_distribution, transition
from src.pk_revenue.infrastructure.persistence import DistributionRepository

logger = logging.getLogger(__name__)


class RevenueApplicationService:
    def __init__(
        self,
        repo: DistributionRepositoryProtocol | None = None,
        assets: AssetRepositoryProtocol | None = None,
        clock: Clock = epoch_seconds,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._repo: DistributionRepositoryProtocol = repo or DistributionRepository()
        self._assets: AssetRepositoryProtocol = assets or AssetRepository()
        self._clock = clock
        self._new_id = id_factory

    async def distribute(
        self,
        db: AsyncSession,
        operator: str,
        asset_id: str,
        total_revenue: int,
        operating_costs: int,
        period_start: int,
        period_end: int,
    ) -> DistributionDetail:
        try:
            # circulating_supply is snapshotted below; hold the row until commit.
            asset = await self._assets.get_for_update(db, asset_id)
            if asset is None:
                raise AssetNotFoundError(asset_id)
            distribution = open_distribution(
                self._new_id(),
                asset,
                operator,
                total_revenue,
                operating_costs,
                period_start,
                period_end,
                self._clock(),
            )
            await self._repo.insert(db, distribution)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Revenue distributed: id=%s asset=%s net=%d outstanding=%d per_token=%d dust=%d",
            distribution.id, asset_id, distribution.net_revenue,
            distribution.total_tokens_outstanding, distribution.revenue_per_token,
            distribution.dust,
        )
        return DistributionDetail.from_domain(distribution)

    async def report_status(
        self,
        db: AsyncSession,
        caller: str,
        distribution_id: str,
        status: DistributionStatus,
        total_distributed: int | None = None,
    ) -> DistributionDetail:
        try:
            distribution = await self._repo.get_for_update(db, distribution_id)
            if distribution is None:
                raise DistributionNotFoundError(distribution_id)
            require_signer(caller, distribution.operator, "report distribution status")
            transition(distribution, status, self._clock(), total_distributed)
            await self._repo.update_status(db, distribution)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Distribution status: id=%s status=%s distributed=%d",
            distribution.id, distribution.distribution_status, distribution.total_distributed,
        )
        return DistributionDetail.from_domain(distribution)

    async def get_distribution(
        self, db: AsyncSession, distribution_id: str
    ) -> DistributionDetail:
        distribution = await self._repo.get_by_id(db, distribution_id)
        if distribution is None:
            raise DistributionNotFoundError(distribution_id)
        return DistributionDetail.from_domain(distribution)

    async def list_by_asset(
        self, db: AsyncSession, asset_id: str, cursor: str | None, limit: int
    ) -> DistributionListResponse:
        items = await self._repo.list_by_asset(db, asset_id, cursor, limit + 1)
        has_more = len(items) > limit
        page = items[:limit]
        return DistributionListResponse(
            items=[DistributionDetail.from_domain(d) for d in page],
            next_cursor=page[-1].id if has_more and page else None,
            has_more=has_more,
        )
