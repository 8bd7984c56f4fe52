"""Integer arithmetic utilities for token and payment amounts.

All supplies, prices, revenues and balances use int in the smallest unit of
their denomination. No float, no Decimal. Every stored quantity lives in a
BIGINT column, so results above MAX_AMOUNT are an overflow, never a wrap.
"""

from src.pk_common.errors import ArithmeticOverflowError

MAX_AMOUNT = 2**63 - 1
BPS_DENOMINATOR = 10_000


def checked_mul(a: int, b: int, what: str = "product") -> int:
    """Multiply two non-negative amounts, raising instead of exceeding MAX_AMOUNT."""
    result = a * b
    if result > MAX_AMOUNT:
        raise ArithmeticOverflowError(f"{what} {a} x {b} exceeds {MAX_AMOUNT}")
    return result


def checked_add(a: int, b: int, what: str = "sum") -> int:
    result = a + b
    if result > MAX_AMOUNT:
        raise ArithmeticOverflowError(f"{what} {a} + {b} exceeds {MAX_AMOUNT}")
    return result


def saturating_sub(a: int, b: int) -> int:
    """a - b floored at zero."""
    return a - b if a > b else 0


def bps_of(amount: int, bps: int) -> int:
    """Floor of amount * bps / 10000."""
    if amount == 0 or bps == 0:
        return 0
    return amount * bps // BPS_DENOMINATOR


def is_valid_amount(value: int) -> bool:
    return 0 <= value <= MAX_AMOUNT
