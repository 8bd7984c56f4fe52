"""Unit tests for TokenApplicationService and the ledger cursor."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from src.pk_token.application.schemas import cursor_decode, cursor_encode
from src.pk_token.application.service import TokenApplicationService
from src.pk_token.domain.models import TokenBalance, TokenLedgerEntry


def _make_entry(entry_id: int) -> TokenLedgerEntry:
    return TokenLedgerEntry(
        id=entry_id,
        owner="buyer-1",
        denomination="USDC",
        entry_type="TRANSFER_OUT",
        amount=-500,
        balance_after=1000,
        reference_type="TRADE",
        reference_id="T-1",
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


class TestCursor:
    def test_round_trip(self) -> None:
        assert cursor_decode(cursor_encode(12345)) == 12345

    def test_garbage_is_none(self) -> None:
        assert cursor_decode("%%%") is None

    def test_none(self) -> None:
        assert cursor_decode(None) is None


class TestHoldings:
    async def test_lists_balances(self) -> None:
        repo = AsyncMock()
        repo.list_holdings.return_value = [
            TokenBalance(owner="buyer-1", denomination="PKA-abc", balance=10),
            TokenBalance(owner="buyer-1", denomination="USDC", balance=1000),
        ]
        svc = TokenApplicationService(repo=repo)

        result = await svc.get_holdings(MagicMock(), "buyer-1")

        assert result.owner == "buyer-1"
        assert [(i.denomination, i.balance) for i in result.items] == [
            ("PKA-abc", 10),
            ("USDC", 1000),
        ]


class TestLedger:
    async def test_has_more_and_cursor(self) -> None:
        repo = AsyncMock()
        repo.list_entries.return_value = [_make_entry(i) for i in (9, 8, 7)]
        svc = TokenApplicationService(repo=repo)
        db = MagicMock()

        result = await svc.list_ledger(db, "buyer-1", None, 2, "USDC")

        repo.list_entries.assert_awaited_once_with(db, "buyer-1", None, 3, "USDC")
        assert [i.id for i in result.items] == [9, 8]
        assert result.has_more is True
        assert cursor_decode(result.next_cursor) == 8
        assert result.items[0].created_at.startswith("2026-01-01")

    async def test_cursor_is_decoded(self) -> None:
        repo = AsyncMock()
        repo.list_entries.return_value = []
        svc = TokenApplicationService(repo=repo)
        db = MagicMock()

        result = await svc.list_ledger(db, "buyer-1", cursor_encode(8), 20, None)

        repo.list_entries.assert_awaited_once_with(db, "buyer-1", 8, 21, None)
        assert result.items == []
        assert result.next_cursor is None
