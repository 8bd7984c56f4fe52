"""Domain models for pk_token: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TokenBalance:
    owner: str
    denomination: str    # payment token ("USDC") or asset token ("PKA-...")
    balance: int         # smallest unit, never negative
    version: int = 0
    updated_at: datetime | None = None


@dataclass
class TokenLedgerEntry:
    id: int                          # BIGSERIAL
    owner: str
    denomination: str
    entry_type: str                  # LedgerEntryType value
    amount: int                      # positive=credit negative=debit
    balance_after: int
    reference_type: str | None = None
    reference_id: str | None = None
    created_at: datetime | None = None


@dataclass
class TransferResult:
    source: TokenBalance
    destination: TokenBalance
