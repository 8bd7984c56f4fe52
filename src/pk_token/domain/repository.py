"""Token ledger Protocol: the mint/transfer primitive every module depends on.

Unit tests inject an AsyncMock that conforms to this Protocol.
Infrastructure layer provides the PostgreSQL implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_token.domain.models import TokenBalance, TokenLedgerEntry, TransferResult


class TokenLedgerProtocol(Protocol):
    async def get_balance(
        self, db: AsyncSession, owner: str, denomination: str
    ) -> int: ...

    async def mint(
        self,
        db: AsyncSession,
        denomination: str,
        to: str,
        amount: int,
        ref_type: str,
        ref_id: str | None,
    ) -> TokenBalance: ...

    async def transfer(
        self,
        db: AsyncSession,
        denomination: str,
        source: str,
        destination: str,
        amount: int,
        ref_type: str,
        ref_id: str | None,
        fee: bool = False,
    ) -> TransferResult: ...

    async def list_holdings(self, db: AsyncSession, owner: str) -> list[TokenBalance]: ...

    async def list_entries(
        self,
        db: AsyncSession,
        owner: str,
        cursor_id: int | None,
        limit: int,
        denomination: str | None,
    ) -> list[TokenLedgerEntry]: ...
