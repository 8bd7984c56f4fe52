"""TokenApplicationService: read side of the token primitive.

Mint and transfer are never exposed directly: they run inside the asset,
listing and admin services' transactions. This service only answers
"what does the caller hold" and "what moved".
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_token.application.schemas import (
    HoldingItem,
    HoldingsResponse,
    LedgerEntryItem,
    LedgerResponse,
    cursor_decode,
    cursor_encode,
)
from src.pk_token.domain.repository import TokenLedgerProtocol
from src.pk_token.infrastructure.persistence import TokenLedgerRepository


class TokenApplicationService:
    def __init__(self, repo: TokenLedgerProtocol | None = None) -> None:
        self._repo: TokenLedgerProtocol = repo or TokenLedgerRepository()

    async def get_holdings(self, db: AsyncSession, owner: str) -> HoldingsResponse:
        balances = await self._repo.list_holdings(db, owner)
        return HoldingsResponse(
            owner=owner,
            items=[HoldingItem(denomination=b.denomination, balance=b.balance) for b in balances],
        )

    async def list_ledger(
        self,
        db: AsyncSession,
        owner: str,
        cursor: str | None,
        limit: int,
        denomination: str | None,
    ) -> LedgerResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_entries(db, owner, cursor_id, limit + 1, denomination)
        has_more = len(entries) > limit
        page = entries[:limit]

        items = [
            LedgerEntryItem(
                id=e.id,
                denomination=e.denomination,
                entry_type=e.entry_type,
                amount=e.amount,
                balance_after=e.balance_after,
                reference_type=e.reference_type,
                reference_id=e.reference_id,
                created_at=e.created_at.isoformat() if e.created_at else "",
            )
            for e in page
        ]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(items=items, next_cursor=next_cursor, has_more=has_more)
