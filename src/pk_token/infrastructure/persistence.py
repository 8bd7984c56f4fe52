"""TokenLedgerRepository: concrete implementation of TokenLedgerProtocol.

Every debit is an atomic conditional UPDATE ... WHERE balance >= :amount
RETURNING. Zero rows back means the source cannot cover the amount, and the
caller's transaction is abandoned by raising InsufficientBalanceError.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_common.enums import LedgerEntryType
from src.pk_common.errors import InsufficientBalanceError, InternalError, InvalidAmountError
from src.pk_token.domain.models import TokenBalance, TokenLedgerEntry, TransferResult

# ---------------------------------------------------------------------------
# SQL: balances
# ---------------------------------------------------------------------------

_CREDIT_SQL = text("""
    INSERT INTO token_balances (owner, denomination, balance)
    VALUES (:owner, :denomination, :amount)
    ON CONFLICT (owner, denomination) DO UPDATE
        SET balance = token_balances.balance + EXCLUDED.balance,
            version = token_balances.version + 1,
            updated_at = NOW()
    RETURNING owner, denomination, balance, version, updated_at
""")

_DEBIT_SQL = text("""
    UPDATE token_balances
    SET balance = balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE owner = :owner AND denomination = :denomination AND balance >= :amount
    RETURNING owner, denomination, balance, version, updated_at
""")

_GET_BALANCE_SQL = text("""
    SELECT balance FROM token_balances
    WHERE owner = :owner AND denomination = :denomination
""")

_LIST_HOLDINGS_SQL = text("""
    SELECT owner, denomination, balance, version, updated_at
    FROM token_balances
    WHERE owner = :owner AND balance > 0
    ORDER BY denomination
""")

# ---------------------------------------------------------------------------
# SQL: journal
# ---------------------------------------------------------------------------

_INSERT_ENTRY_SQL = text("""
    INSERT INTO token_ledger_entries
        (owner, denomination, entry_type, amount, balance_after,
         reference_type, reference_id)
    VALUES
        (:owner, :denomination, :entry_type, :amount, :balance_after,
         :reference_type, :reference_id)
""")

_LIST_ENTRIES_SQL = text("""
    SELECT id, owner, denomination, entry_type, amount, balance_after,
           reference_type, reference_id, created_at
    FROM token_ledger_entries
    WHERE owner = :owner
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:denomination AS TEXT) IS NULL OR denomination = CAST(:denomination AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_balance(row: object) -> TokenBalance:
    return TokenBalance(
        owner=row.owner,  # type: ignore[attr-defined]
        denomination=row.denomination,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_entry(row: object) -> TokenLedgerEntry:
    return TokenLedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        owner=row.owner,  # type: ignore[attr-defined]
        denomination=row.denomination,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        reference_type=row.reference_type,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class TokenLedgerRepository:
    """Concrete token primitive: all movements atomic at the SQL level."""

    async def get_balance(self, db: AsyncSession, owner: str, denomination: str) -> int:
        result = await db.execute(
            _GET_BALANCE_SQL, {"owner": owner, "denomination": denomination}
        )
        balance = result.scalar_one_or_none()
        return int(balance) if balance is not None else 0

    async def mint(
        self,
        db: AsyncSession,
        denomination: str,
        to: str,
        amount: int,
        ref_type: str,
        ref_id: str | None,
    ) -> TokenBalance:
        if amount <= 0:
            raise InvalidAmountError(f"mint amount must be positive, got {amount}")
        balance = await self._credit(db, denomination, to, amount)
        await self._journal(
            db, balance, LedgerEntryType.MINT, amount, ref_type, ref_id
        )
        return balance

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
    ) -> TransferResult:
        if amount <= 0:
            raise InvalidAmountError(f"transfer amount must be positive, got {amount}")
        result = await db.execute(
            _DEBIT_SQL, {"owner": source, "denomination": denomination, "amount": amount}
        )
        row = result.fetchone()
        if row is None:
            available = await self.get_balance(db, source, denomination)
            raise InsufficientBalanceError(denomination, amount, available)
        debited = _row_to_balance(row)
        credited = await self._credit(db, denomination, destination, amount)

        out_type, in_type = (
            (LedgerEntryType.FEE, LedgerEntryType.FEE_REVENUE)
            if fee
            else (LedgerEntryType.TRANSFER_OUT, LedgerEntryType.TRANSFER_IN)
        )
        await self._journal(db, debited, out_type, -amount, ref_type, ref_id)
        await self._journal(db, credited, in_type, amount, ref_type, ref_id)
        return TransferResult(source=debited, destination=credited)

    async def list_holdings(self, db: AsyncSession, owner: str) -> list[TokenBalance]:
        result = await db.execute(_LIST_HOLDINGS_SQL, {"owner": owner})
        return [_row_to_balance(row) for row in result.fetchall()]

    async def list_entries(
        self,
        db: AsyncSession,
        owner: str,
        cursor_id: int | None,
        limit: int,
        denomination: str | None,
    ) -> list[TokenLedgerEntry]:
        result = await db.execute(
            _LIST_ENTRIES_SQL,
            {
                "owner": owner,
                "cursor_id": cursor_id,
                "denomination": denomination,
                "limit": limit,
            },
        )
        return [_row_to_entry(row) for row in result.fetchall()]

    async def _credit(
        self, db: AsyncSession, denomination: str, owner: str, amount: int
    ) -> TokenBalance:
        result = await db.execute(
            _CREDIT_SQL, {"owner": owner, "denomination": denomination, "amount": amount}
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Balance upsert returned no rows: this should never happen")
        return _row_to_balance(row)

    async def _journal(
        self,
        db: AsyncSession,
        balance: TokenBalance,
        entry_type: LedgerEntryType,
        amount: int,
        ref_type: str,
        ref_id: str | None,
    ) -> None:
        await db.execute(
            _INSERT_ENTRY_SQL,
            {
                "owner": balance.owner,
                "denomination": balance.denomination,
                "entry_type": entry_type.value,
                "amount": amount,
                "balance_after": balance.balance,
                "reference_type": ref_type,
                "reference_id": ref_id,
            },
        )
