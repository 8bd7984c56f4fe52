"""AssetApplicationService: tokenization and operator-only asset mutations.

Write operations commit or roll back the session themselves; the mint of the
initial supply shares the transaction with the asset insert.
"""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_asset.application.schemas import (
    AssetDetail,
    AssetListResponse,
    YieldResponse,
)
from src.pk_asset.domain.models import ParkingAsset, token_denomination_for
from src.pk_asset.domain.repository import AssetRepositoryProtocol
from src.pk_asset.domain.rules import check_parking_lot_id, validate_tokenization
from src.pk_asset.infrastructure.persistence import AssetRepository
from src.pk_common.datetime_utils import Clock, epoch_seconds
from src.pk_common.enums import AssetType, ComplianceStatus
from src.pk_common.errors import AssetAlreadyTokenizedError, AssetNotFoundError
from src.pk_common.id_generator import derive_id
from src.pk_gateway.auth.signer import require_signer
from src.pk_token.domain.repository import TokenLedgerProtocol
from src.pk_token.infrastructure.persistence import TokenLedgerRepository

logger = logging.getLogger(__name__)


class AssetApplicationService:
    def __init__(
        self,
        repo: AssetRepositoryProtocol | None = None,
        tokens: TokenLedgerProtocol | None = None,
        clock: Clock = epoch_seconds,
    ) -> None:
        self._repo: AssetRepositoryProtocol = repo or AssetRepository()
        self._tokens: TokenLedgerProtocol = tokens or TokenLedgerRepository()
        self._clock = clock

    async def tokenize(
        self,
        db: AsyncSession,
        operator: str,
        parking_lot_id: int,
        spot_label: str,
        asset_type: AssetType,
        total_supply: int,
        estimated_value: int,
        annual_revenue: int,
        revenue_share_bps: int,
    ) -> AssetDetail:
        validate_tokenization(
            spot_label, total_supply, estimated_value, annual_revenue, revenue_share_bps
        )
        check_parking_lot_id(parking_lot_id)
        asset_id = derive_id("AST", parking_lot_id, spot_label)
        asset = ParkingAsset(
            id=asset_id,
            token_denomination=token_denomination_for(asset_id),
            asset_type=AssetType(asset_type).value,
            parking_lot_id=parking_lot_id,
            spot_label=spot_label,
            total_supply=total_supply,
            circulating_supply=total_supply,
            estimated_value=estimated_value,
            annual_revenue=annual_revenue,
            revenue_share_bps=revenue_share_bps,
            institutional_operator=operator,
            compliance_status=ComplianceStatus.PENDING.value,
            is_active=True,
            is_tradeable=True,
            created_at=self._clock(),
        )
        try:
            if not await self._repo.insert(db, asset):
                raise AssetAlreadyTokenizedError(parking_lot_id, spot_label)
            await self._tokens.mint(
                db, asset.token_denomination, operator, total_supply, "ASSET", asset_id
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Asset tokenized: id=%s lot=%d spot=%s supply=%d operator=%s",
            asset_id, parking_lot_id, spot_label, total_supply, operator,
        )
        return AssetDetail.from_domain(asset)

    async def update_compliance(
        self, db: AsyncSession, caller: str, asset_id: str, new_status: ComplianceStatus
    ) -> AssetDetail:
        def mutate(asset: ParkingAsset) -> None:
            asset.compliance_status = ComplianceStatus(new_status).value

        return await self._mutate(db, caller, asset_id, "update compliance", mutate)

    async def set_active(
        self, db: AsyncSession, caller: str, asset_id: str, flag: bool
    ) -> AssetDetail:
        def mutate(asset: ParkingAsset) -> None:
            asset.is_active = flag

        return await self._mutate(db, caller, asset_id, "set asset active flag", mutate)

    async def set_tradeable(
        self, db: AsyncSession, caller: str, asset_id: str, flag: bool
    ) -> AssetDetail:
        def mutate(asset: ParkingAsset) -> None:
            asset.is_tradeable = flag

        return await self._mutate(db, caller, asset_id, "set asset tradeable flag", mutate)

    async def get_asset(self, db: AsyncSession, asset_id: str) -> AssetDetail:
        asset = await self._repo.get_by_id(db, asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return AssetDetail.from_domain(asset)

    async def get_yield(self, db: AsyncSession, asset_id: str) -> YieldResponse:
        asset = await self._repo.get_by_id(db, asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return YieldResponse(
            asset_id=asset.id,
            estimated_value=asset.estimated_value,
            annual_revenue=asset.annual_revenue,
            yield_bps=asset.calculate_yield(),
        )

    async def list_assets(
        self,
        db: AsyncSession,
        operator: str | None,
        tradeable_only: bool,
        cursor: str | None,
        limit: int,
    ) -> AssetListResponse:
        # Fetch limit+1 to detect has_more without COUNT(*)
        assets = await self._repo.list_assets(db, operator, tradeable_only, cursor, limit + 1)
        has_more = len(assets) > limit
        page = assets[:limit]
        return AssetListResponse(
            items=[AssetDetail.from_domain(a) for a in page],
            next_cursor=page[-1].id if has_more and page else None,
            has_more=has_more,
        )

    async def _mutate(
        self,
        db: AsyncSession,
        caller: str,
        asset_id: str,
        action: str,
        mutate: Callable[[ParkingAsset], None],
    ) -> AssetDetail:
        """Lock the asset, check the caller is its operator, apply and persist."""
        try:
            asset = await self._repo.get_for_update(db, asset_id)
            if asset is None:
                raise AssetNotFoundError(asset_id)
            require_signer(caller, asset.institutional_operator, action)
            mutate(asset)
            await self._repo.update_flags(db, asset)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Asset updated: id=%s compliance=%s active=%s tradeable=%s",
            asset.id, asset.compliance_status, asset.is_active, asset.is_tradeable,
        )
        return AssetDetail.from_domain(asset)
