"""Pydantic schemas and cursor utilities for pk_token API."""

import base64
import json

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except Exception:
        return None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class HoldingItem(BaseModel):
    denomination: str
    balance: int


class HoldingsResponse(BaseModel):
    owner: str
    items: list[HoldingItem]


class LedgerEntryItem(BaseModel):
    id: int
    denomination: str
    entry_type: str
    amount: int
    balance_after: int
    reference_type: str | None
    reference_id: str | None
    created_at: str  # ISO8601 string


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool
