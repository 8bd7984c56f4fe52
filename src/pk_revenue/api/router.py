"""pk_revenue REST endpoints.

POST /assets/{asset_id}/distributions          operator records a revenue period
GET  /assets/{asset_id}/distributions          history, newest first
GET  /distributions/{distribution_id}          full detail
POST /distributions/{distribution_id}/status   payout status report, operator only
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_common.database import get_db_session
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, get_caller
from src.pk_revenue.application.schemas import DistributeRequest, ReportStatusRequest
from src.pk_revenue.application.service import RevenueApplicationService

router = APIRouter(tags=["revenue"])

_service = RevenueApplicationService()


@router.post("/assets/{asset_id}/distributions", status_code=201)
async def distribute(
    asset_id: str,
    body: DistributeRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.distribute(
        db,
        caller.identity,
        asset_id,
        body.total_revenue,
        body.operating_costs,
        body.period_start,
        body.period_end,
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/assets/{asset_id}/distributions")
async def list_distributions(
    asset_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    data = await _service.list_by_asset(db, asset_id, cursor, limit)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/distributions/{distribution_id}")
async def get_distribution(
    distribution_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_distribution(db, distribution_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/distributions/{distribution_id}/status")
async def report_status(
    distribution_id: str,
    body: ReportStatusRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.report_status(
        db, caller.identity, distribution_id, body.status, body.total_distributed
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
