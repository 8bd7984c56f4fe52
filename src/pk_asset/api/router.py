"""pk_asset REST endpoints.

POST /assets                          tokenize a parking spot (caller becomes operator)
GET  /assets                          list with cursor pagination
GET  /assets/{asset_id}               full detail
GET  /assets/{asset_id}/yield         annual yield in bps
POST /assets/{asset_id}/compliance    operator only
POST /assets/{asset_id}/active        operator only
POST /assets/{asset_id}/tradeable     operator only
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_asset.application.schemas import (
    SetFlagRequest,
    TokenizeAssetRequest,
    UpdateComplianceRequest,
)
from src.pk_asset.application.service import AssetApplicationService
from src.pk_common.database import get_db_session
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, get_caller

router = APIRouter(prefix="/assets", tags=["assets"])

_service = AssetApplicationService()


@router.post("", status_code=201)
async def tokenize_asset(
    body: TokenizeAssetRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.tokenize(
        db,
        caller.identity,
        body.parking_lot_id,
        body.spot_label,
        body.asset_type,
        body.total_supply,
        body.estimated_value,
        body.annual_revenue,
        body.revenue_share_bps,
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("")
async def list_assets(
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    operator: str | None = Query(None, description="Filter by institutional operator"),
    tradeable_only: bool = Query(False, description="Only active and tradeable assets"),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    data = await _service.list_assets(db, operator, tradeable_only, cursor, limit)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{asset_id}")
async def get_asset(
    asset_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_asset(db, asset_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{asset_id}/yield")
async def get_yield(
    asset_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_yield(db, asset_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/{asset_id}/compliance")
async def update_compliance(
    asset_id: str,
    body: UpdateComplianceRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.update_compliance(
        db, caller.identity, asset_id, body.compliance_status
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/{asset_id}/active")
async def set_active(
    asset_id: str,
    body: SetFlagRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.set_active(db, caller.identity, asset_id, body.value)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/{asset_id}/tradeable")
async def set_tradeable(
    asset_id: str,
    body: SetFlagRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.set_tradeable(db, caller.identity, asset_id, body.value)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
