"""Signer check: an explicit identity comparison in place of signature verification."""

from src.pk_common.errors import UnauthorizedError


def require_signer(caller: str, expected: str, action: str) -> None:
    """Fail the whole operation unless `expected` is the one who signed it."""
    if caller != expected:
        raise UnauthorizedError(caller, action)
