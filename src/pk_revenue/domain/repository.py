"""DistributionRepository Protocol: interface contract for persistence layer."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_revenue.domain.models import RevenueDistribution


class DistributionRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, distribution: RevenueDistribution) -> None: ...

    async def get_by_id(
        self, db: AsyncSession, distribution_id: str
    ) -> RevenueDistribution | None: ...

    async def get_for_update(
        self, db: AsyncSession, distribution_id: str
    ) -> RevenueDistribution | None: ...

    async def update_status(self, db: AsyncSession, distribution: RevenueDistribution) -> None:
        """Persist distribution_status, total_distributed and completed_at."""
        ...

    async def list_by_asset(
        self, db: AsyncSession, asset_id: str, cursor_id: str | None, limit: int
    ) -> list[RevenueDistribution]: ...

    async def count(self, db: AsyncSession) -> int: ...
