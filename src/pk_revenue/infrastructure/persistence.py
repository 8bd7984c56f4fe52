"""DistributionRepository: concrete implementation of DistributionRepositoryProtocol."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_revenue.domain.models import RevenueDistribution

_COLUMNS = """
    id, asset_id, period_start, period_end, total_revenue, operating_costs,
    net_revenue, total_tokens_outstanding, revenue_per_token, total_distributed,
    distribution_status, operator, created_at, completed_at
"""

_INSERT_SQL = text(f"""
    INSERT INTO revenue_distributions ({_COLUMNS})
    VALUES (
        :id, :asset_id, :period_start, :period_end, :total_revenue, :operating_costs,
        :net_revenue, :total_tokens_outstanding, :revenue_per_token, :total_distributed,
        :distribution_status, :operator, :created_at, :completed_at
    )
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM revenue_distributions WHERE id = :distribution_id")

_GET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM revenue_distributions WHERE id = :distribution_id FOR UPDATE"
)

_UPDATE_STATUS_SQL = text("""
    UPDATE revenue_distributions
    SET distribution_status = :distribution_status,
        total_distributed = :total_distributed,
        completed_at = :completed_at,
        updated_at = NOW()
    WHERE id = :distribution_id
""")

_LIST_BY_ASSET_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM revenue_distributions
    WHERE asset_id = :asset_id
      AND (CAST(:cursor_id AS TEXT) IS NULL OR id < CAST(:cursor_id AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")

_COUNT_SQL = text("SELECT COUNT(*) FROM revenue_distributions")


def _row_to_distribution(row: object) -> RevenueDistribution:
    return RevenueDistribution(
        id=row.id,  # type: ignore[attr-defined]
        asset_id=row.asset_id,  # type: ignore[attr-defined]
        period_start=row.period_start,  # type: ignore[attr-defined]
        period_end=row.period_end,  # type: ignore[attr-defined]
        total_revenue=row.total_revenue,  # type: ignore[attr-defined]
        operating_costs=row.operating_costs,  # type: ignore[attr-defined]
        net_revenue=row.net_revenue,  # type: ignore[attr-defined]
        total_tokens_outstanding=row.total_tokens_outstanding,  # type: ignore[attr-defined]
        revenue_per_token=row.revenue_per_token,  # type: ignore[attr-defined]
        total_distributed=row.total_distributed,  # type: ignore[attr-defined]
        distribution_status=row.distribution_status,  # type: ignore[attr-defined]
        operator=row.operator,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        completed_at=row.completed_at,  # type: ignore[attr-defined]
    )


class DistributionRepository:
    async def insert(self, db: AsyncSession, distribution: RevenueDistribution) -> None:
        await db.execute(
            _INSERT_SQL,
            {
                "id": distribution.id,
                "asset_id": distribution.asset_id,
                "period_start": distribution.period_start,
                "period_end": distribution.period_end,
                "total_revenue": distribution.total_revenue,
                "operating_costs": distribution.operating_costs,
                "net_revenue": distribution.net_revenue,
                "total_tokens_outstanding": distribution.total_tokens_outstanding,
                "revenue_per_token": distribution.revenue_per_token,
                "total_distributed": distribution.total_distributed,
                "distribution_status": distribution.distribution_status,
                "operator": distribution.operator,
                "created_at": distribution.created_at,
                "completed_at": distribution.completed_at,
            },
        )

    async def get_by_id(
        self, db: AsyncSession, distribution_id: str
    ) -> RevenueDistribution | None:
        row = (await db.execute(_GET_SQL, {"distribution_id": distribution_id})).fetchone()
        return _row_to_distribution(row) if row else None

    async def get_for_update(
        self, db: AsyncSession, distribution_id: str
    ) -> RevenueDistribution | None:
        row = (
            await db.execute(_GET_FOR_UPDATE_SQL, {"distribution_id": distribution_id})
        ).fetchone()
        return _row_to_distribution(row) if row else None

    async def update_status(self, db: AsyncSession, distribution: RevenueDistribution) -> None:
        await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "distribution_id": distribution.id,
                "distribution_status": distribution.distribution_status,
                "total_distributed": distribution.total_distributed,
                "completed_at": distribution.completed_at,
            },
        )

    async def list_by_asset(
        self, db: AsyncSession, asset_id: str, cursor_id: str | None, limit: int
    ) -> list[RevenueDistribution]:
        result = await db.execute(
            _LIST_BY_ASSET_SQL, {"asset_id": asset_id, "cursor_id": cursor_id, "limit": limit}
        )
        return [_row_to_distribution(row) for row in result.fetchall()]

    async def count(self, db: AsyncSession) -> int:
        return int((await db.execute(_COUNT_SQL)).scalar_one())
