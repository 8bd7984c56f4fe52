"""pk_token REST API: the caller's holdings and token ledger."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_common.database import get_db_session
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, get_caller
from src.pk_token.application.service import TokenApplicationService

router = APIRouter(prefix="/tokens", tags=["tokens"])

_service = TokenApplicationService()


@router.get("/holdings")
async def get_holdings(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_holdings(db, caller.identity)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/ledger")
async def list_ledger(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    denomination: str | None = Query(None, description="Filter by token denomination"),
) -> ApiResponse:
    data = await _service.list_ledger(db, caller.identity, cursor, limit, denomination)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
