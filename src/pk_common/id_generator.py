"""Record identifiers.

Two schemes:
  - derive_id(): deterministic, content-addressed ids. Assets are keyed by
    (parking_lot_id, spot_label) so the same spot can only be tokenized once.
  - generate_id(): time-ordered snowflake-style ids for listings, trades and
    distributions (monotonic within one process, sortable as strings of equal
    length once zero-padded).
"""

import hashlib
import threading
import time
from collections.abc import Callable

from src.pk_common.errors import InternalError

_ID_WIDTH = 20  # digits of 2**63 - 1


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def derive_id(prefix: str, *parts: object) -> str:
    """Stable id from the given parts, e.g. derive_id("AST", 7, "A-42")."""
    seed = "\x1f".join(str(p) for p in parts).encode()
    return f"{prefix}-{hashlib.sha256(seed).hexdigest()[:24]}"


class SnowflakeIdGenerator:
    """Layout (63 bits): 41 bits ms since epoch | 10 bits worker | 12 bits sequence.

    A clock that steps backwards raises InternalError instead of blocking the
    caller. When the 4096 ids of one millisecond are used up, the generator
    waits for the next tick, which is at most one millisecond away.
    """

    _EPOCH_MS = 1_735_689_600_000  # 2025-01-01T00:00:00Z
    _WORKER_BITS = 10
    _SEQUENCE_BITS = 12
    _MAX_SEQUENCE = (1 << _SEQUENCE_BITS) - 1

    def __init__(self, worker_id: int = 0, clock_ms: Callable[[], int] = _wall_clock_ms) -> None:
        if not (0 <= worker_id < (1 << self._WORKER_BITS)):
            raise ValueError(f"worker_id must be 0-{(1 << self._WORKER_BITS) - 1}")
        self._worker_id = worker_id
        self._clock_ms = clock_ms
        self._sequence = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_int(self) -> int:
        with self._lock:
            now_ms = self._clock_ms()
            if now_ms < self._last_ms:
                raise InternalError(
                    f"clock moved backwards by {self._last_ms - now_ms}ms; refusing to issue ids"
                )
            if now_ms == self._last_ms:
                self._sequence = (self._sequence + 1) & self._MAX_SEQUENCE
                if self._sequence == 0:
                    now_ms = self._next_tick()
            else:
                self._sequence = 0
            self._last_ms = now_ms
            return (
                ((now_ms - self._EPOCH_MS) << (self._WORKER_BITS + self._SEQUENCE_BITS))
                | (self._worker_id << self._SEQUENCE_BITS)
                | self._sequence
            )

    def _next_tick(self) -> int:
        now_ms = self._clock_ms()
        while now_ms == self._last_ms:
            now_ms = self._clock_ms()
        if now_ms < self._last_ms:
            raise InternalError(
                f"clock moved backwards by {self._last_ms - now_ms}ms; refusing to issue ids"
            )
        return now_ms

    def next_id(self) -> str:
        return str(self.next_int()).zfill(_ID_WIDTH)


_default_generator = SnowflakeIdGenerator()


def generate_id() -> str:
    """Time-ordered id from the module-level generator."""
    return _default_generator.next_id()
