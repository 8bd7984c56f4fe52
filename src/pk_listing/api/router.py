"""pk_listing REST endpoints.

POST /listings                          create a listing (caller is the seller)
GET  /listings                          active, unexpired listings
GET  /listings/{listing_id}             full detail
GET  /listings/{listing_id}/validity    ACTIVE and not past expiry
POST /listings/{listing_id}/buy         partial or full fill, rate limited
POST /listings/{listing_id}/cancel      seller only
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pk_common.database import get_db_session
from src.pk_common.response import ApiResponse, success_response
from src.pk_gateway.auth.dependencies import Caller, get_caller
from src.pk_gateway.middleware.rate_limit import limit_purchases
from src.pk_listing.application.schemas import BuyRequest, CreateListingRequest
from src.pk_listing.application.service import ListingApplicationService

router = APIRouter(prefix="/listings", tags=["listings"])

_service = ListingApplicationService()


@router.post("", status_code=201)
async def create_listing(
    body: CreateListingRequest,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.create_listing(
        db,
        caller.identity,
        body.asset_id,
        body.listing_type,
        body.token_amount,
        body.price_per_token,
        body.payment_methods,
        body.minimum_purchase,
        body.kyb_required,
        body.ttl_seconds,
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("")
async def list_listings(
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    asset_id: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    data = await _service.list_active(db, asset_id, cursor, limit)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_listing(db, listing_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{listing_id}/validity")
async def get_validity(
    listing_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.is_listing_valid(db, listing_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/{listing_id}/buy")
async def buy(
    listing_id: str,
    body: BuyRequest,
    request: Request,
    caller: Annotated[Caller, Depends(limit_purchases)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.buy(
        db,
        caller.identity,
        listing_id,
        body.token_amount,
        body.payment_denomination,
        caller.kyb_verified,
    )
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))


@router.post("/{listing_id}/cancel")
async def cancel_listing(
    listing_id: str,
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.cancel_listing(db, caller.identity, listing_id)
    return success_response(data.model_dump(), getattr(request.state, "request_id", None))
