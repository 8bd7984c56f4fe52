"""AssetRepository Protocol: interface contract for persistence layer."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_asset.domain.models import ParkingAsset


class AssetRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, asset: ParkingAsset) -> bool:
        """Insert a new asset. False when the spot is already tokenized."""
        ...

    async def get_by_id(self, db: AsyncSession, asset_id: str) -> ParkingAsset | None: ...

    async def get_for_update(self, db: AsyncSession, asset_id: str) -> ParkingAsset | None:
        """SELECT ... FOR UPDATE: holds the row until the transaction ends."""
        ...

    async def update_flags(self, db: AsyncSession, asset: ParkingAsset) -> None:
        """Persist compliance_status, is_active and is_tradeable."""
        ...

    async def list_assets(
        self,
        db: AsyncSession,
        operator: str | None,
        tradeable_only: bool,
        cursor_id: str | None,
        limit: int,
    ) -> list[ParkingAsset]: ...

    async def count(self, db: AsyncSession, tradeable_only: bool = False) -> int: ...

    async def average_yield_bps(self, db: AsyncSession) -> int: ...
