"""ListingRepository Protocol: interface contract for persistence layer."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_listing.domain.models import MarketplaceListing


class ListingRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, listing: MarketplaceListing) -> None: ...

    async def get_by_id(
        self, db: AsyncSession, listing_id: str
    ) -> MarketplaceListing | None: ...

    async def get_for_update(
        self, db: AsyncSession, listing_id: str
    ) -> MarketplaceListing | None: ...

    async def update_state(self, db: AsyncSession, listing: MarketplaceListing) -> None:
        """Persist token_amount and status."""
        ...

    async def list_active(
        self,
        db: AsyncSession,
        now: int,
        asset_id: str | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[MarketplaceListing]: ...

    async def count(self, db: AsyncSession) -> int: ...

    async def count_active(self, db: AsyncSession, now: int) -> int: ...
