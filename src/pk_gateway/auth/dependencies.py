"""FastAPI dependencies: the authenticated caller and the signer checks.

Usage in any protected router:
    from src.pk_gateway.auth.dependencies import Caller, get_caller

    @router.post("/protected")
    async def protected(caller: Annotated[Caller, Depends(get_caller)]):
        ...
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from config.settings import settings
from src.pk_common.errors import InvalidCredentialsError
from src.pk_gateway.auth.jwt_handler import decode_token
from src.pk_gateway.auth.signer import require_signer

# Tokens come from the external identity provider; tokenUrl is informational only.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


@dataclass(frozen=True)
class Caller:
    """Identity that authorized the current call."""

    identity: str
    kyb_verified: bool = False


async def get_caller(token: str = Depends(oauth2_scheme)) -> Caller:
    """Extract and validate the Bearer token. HTTP 401 when missing or invalid."""
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    identity = payload.get("sub")
    if not identity:
        raise _CREDENTIALS_EXCEPTION
    return Caller(identity=str(identity), kyb_verified=bool(payload.get("kyb", False)))


async def require_platform_admin(caller: Caller = Depends(get_caller)) -> Caller:
    """Only the configured platform admin may change marketplace-wide settings."""
    require_signer(caller.identity, settings.PLATFORM_ADMIN_ID, "administer the platform")
    return caller
