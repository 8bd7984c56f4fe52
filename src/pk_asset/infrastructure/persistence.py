"""AssetRepository: concrete implementation of AssetRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_asset.domain.models import ParkingAsset

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, token_denomination, asset_type, parking_lot_id, spot_label,
    total_supply, circulating_supply, estimated_value, annual_revenue,
    revenue_share_bps, institutional_operator, compliance_status,
    is_active, is_tradeable, created_at
"""

# (parking_lot_id, spot_label) is UNIQUE; a duplicate spot inserts nothing.
_INSERT_SQL = text(f"""
    INSERT INTO parking_assets ({_COLUMNS})
    VALUES (
        :id, :token_denomination, :asset_type, :parking_lot_id, :spot_label,
        :total_supply, :circulating_supply, :estimated_value, :annual_revenue,
        :revenue_share_bps, :institutional_operator, :compliance_status,
        :is_active, :is_tradeable, :created_at
    )
    ON CONFLICT DO NOTHING
    RETURNING id
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM parking_assets WHERE id = :asset_id")

_GET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM parking_assets WHERE id = :asset_id FOR UPDATE"
)

_UPDATE_FLAGS_SQL = text("""
    UPDATE parking_assets
    SET compliance_status = :compliance_status,
        is_active = :is_active,
        is_tradeable = :is_tradeable,
        updated_at = NOW()
    WHERE id = :asset_id
""")

_LIST_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM parking_assets
    WHERE (CAST(:operator AS TEXT) IS NULL OR institutional_operator = CAST(:operator AS TEXT))
      AND (NOT :tradeable_only OR (is_active AND is_tradeable))
      AND (CAST(:cursor_id AS TEXT) IS NULL OR id > CAST(:cursor_id AS TEXT))
    ORDER BY id
    LIMIT :limit
""")

_COUNT_SQL = text("""
    SELECT COUNT(*) FROM parking_assets
    WHERE NOT :tradeable_only OR (is_active AND is_tradeable)
""")

_AVG_YIELD_SQL = text("""
    SELECT COALESCE(AVG(annual_revenue::NUMERIC * 10000 / estimated_value), 0)
    FROM parking_assets
    WHERE is_active AND estimated_value > 0
""")


def _row_to_asset(row: object) -> ParkingAsset:
    return ParkingAsset(
        id=row.id,  # type: ignore[attr-defined]
        token_denomination=row.token_denomination,  # type: ignore[attr-defined]
        asset_type=row.asset_type,  # type: ignore[attr-defined]
        parking_lot_id=row.parking_lot_id,  # type: ignore[attr-defined]
        spot_label=row.spot_label,  # type: ignore[attr-defined]
        total_supply=row.total_supply,  # type: ignore[attr-defined]
        circulating_supply=row.circulating_supply,  # type: ignore[attr-defined]
        estimated_value=row.estimated_value,  # type: ignore[attr-defined]
        annual_revenue=row.annual_revenue,  # type: ignore[attr-defined]
        revenue_share_bps=row.revenue_share_bps,  # type: ignore[attr-defined]
        institutional_operator=row.institutional_operator,  # type: ignore[attr-defined]
        compliance_status=row.compliance_status,  # type: ignore[attr-defined]
        is_active=row.is_active,  # type: ignore[attr-defined]
        is_tradeable=row.is_tradeable,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class AssetRepository:
    async def insert(self, db: AsyncSession, asset: ParkingAsset) -> bool:
        result = await db.execute(
            _INSERT_SQL,
            {
                "id": asset.id,
                "token_denomination": asset.token_denomination,
                "asset_type": asset.asset_type,
                "parking_lot_id": asset.parking_lot_id,
                "spot_label": asset.spot_label,
                "total_supply": asset.total_supply,
                "circulating_supply": asset.circulating_supply,
                "estimated_value": asset.estimated_value,
                "annual_revenue": asset.annual_revenue,
                "revenue_share_bps": asset.revenue_share_bps,
                "institutional_operator": asset.institutional_operator,
                "compliance_status": asset.compliance_status,
                "is_active": asset.is_active,
                "is_tradeable": asset.is_tradeable,
                "created_at": asset.created_at,
            },
        )
        return result.fetchone() is not None

    async def get_by_id(self, db: AsyncSession, asset_id: str) -> ParkingAsset | None:
        row = (await db.execute(_GET_SQL, {"asset_id": asset_id})).fetchone()
        return _row_to_asset(row) if row else None

    async def get_for_update(self, db: AsyncSession, asset_id: str) -> ParkingAsset | None:
        row = (await db.execute(_GET_FOR_UPDATE_SQL, {"asset_id": asset_id})).fetchone()
        return _row_to_asset(row) if row else None

    async def update_flags(self, db: AsyncSession, asset: ParkingAsset) -> None:
        await db.execute(
            _UPDATE_FLAGS_SQL,
            {
                "asset_id": asset.id,
                "compliance_status": asset.compliance_status,
                "is_active": asset.is_active,
                "is_tradeable": asset.is_tradeable,
            },
        )

    async def list_assets(
        self,
        db: AsyncSession,
        operator: str | None,
        tradeable_only: bool,
        cursor_id: str | None,
        limit: int,
    ) -> list[ParkingAsset]:
        result = await db.execute(
            _LIST_SQL,
            {
                "operator": operator,
                "tradeable_only": tradeable_only,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        return [_row_to_asset(row) for row in result.fetchall()]

    async def count(self, db: AsyncSession, tradeable_only: bool = False) -> int:
        result = await db.execute(_COUNT_SQL, {"tradeable_only": tradeable_only})
        return int(result.scalar_one())

    async def average_yield_bps(self, db: AsyncSession) -> int:
        result = await db.execute(_AVG_YIELD_SQL)
        return int(result.scalar_one())
