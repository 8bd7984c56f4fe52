"""Trades REST API: read-only view of the trade ledger."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_common.database import get_db_session
from src.pk_common.errors import TradeNotFoundError
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, get_caller
from src.pk_trade.application.schemas import TradeListResponse, TradeResponse
from src.pk_trade.infrastructure.trades_repository import TradesRepository

router = APIRouter(prefix="/trades", tags=["trades"])
_repo = TradesRepository()


@router.get("")
async def list_trades(
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    listing_id: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    items = await _repo.list_by_party(db, caller.identity, listing_id, limit + 1, cursor)
    has_more = len(items) > limit
    if has_more:
        items = items[:limit]
    next_cursor = items[-1].id if has_more and items else None
    data = TradeListResponse(
        items=[TradeResponse.from_domain(t) for t in items],
        has_more=has_more,
        next_cursor=next_cursor,
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{trade_id}")
async def get_trade(
    trade_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    trade = await _repo.get_by_id(db, trade_id)
    if trade is None:
        raise TradeNotFoundError(trade_id)
    data = TradeResponse.from_domain(trade)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
