"""Clock helpers. The marketplace reasons in integer Unix seconds."""

import time
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], int]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_seconds() -> int:
    """Default clock source: current Unix time in whole seconds."""
    return int(time.time())


def to_iso(ts: int | None) -> str | None:
    """Unix seconds -> ISO8601 UTC string (None passes through)."""
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
