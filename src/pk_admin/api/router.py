"""Admin REST API: platform admin identity only (settings.PLATFORM_ADMIN_ID)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_admin.application.schemas import MintPaymentTokenRequest, UpdatePlatformFeeRequest
from src.pk_admin.application.service import AdminService
from src.pk_common.database import get_db_session
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, require_platform_admin

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


@router.get("/stats")
async def get_stats(
    request: Request,
    admin: Annotated[Caller, Depends(require_platform_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_stats(db)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/platform-fee")
async def get_platform_fee(
    request: Request,
    admin: Annotated[Caller, Depends(require_platform_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_platform_fee(db)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.put("/platform-fee")
async def update_platform_fee(
    body: UpdatePlatformFeeRequest,
    request: Request,
    admin: Annotated[Caller, Depends(require_platform_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.update_platform_fee(db, body.fee_bps)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/payment-tokens/mint")
async def mint_payment_token(
    body: MintPaymentTokenRequest,
    request: Request,
    admin: Annotated[Caller, Depends(require_platform_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.mint_payment_token(db, body.denomination, body.to, body.amount)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
