"""TradesRepository Protocol: the trade ledger is append-only."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_trade.domain.models import Trade


class TradesRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, trade: Trade) -> None: ...

    async def get_by_id(self, db: AsyncSession, trade_id: str) -> Trade | None: ...

    async def list_by_party(
        self,
        db: AsyncSession,
        identity: str,
        listing_id: str | None,
        limit: int,
        cursor_id: str | None,
    ) -> list[Trade]: ...

    async def count(self, db: AsyncSession) -> int: ...

    async def volume_by_denomination(self, db: AsyncSession) -> dict[str, tuple[int, int]]:
        """denomination -> (sum of price_paid, sum of platform_fee)."""
        ...
