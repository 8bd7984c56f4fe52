"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.pk_admin.api.router import router as admin_router
from src.pk_asset.api.router import router as asset_router
from src.pk_common.database import engine
from src.pk_common.errors import AppError
from src.pk_common.redis_client import close_redis, ping_redis
from src.pk_common.response import error_response
from src.pk_gateway.middleware.request_log import RequestLogMiddleware
from src.pk_listing.api.router import router as listing_router
from src.pk_revenue.api.router import router as revenue_router
from src.pk_token.api.router import router as token_router
from src.pk_trade.api.router import router as trade_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await ping_redis()
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(asset_router, prefix="/api/v1")
app.include_router(listing_router, prefix="/api/v1")
app.include_router(trade_router, prefix="/api/v1")
app.include_router(revenue_router, prefix="/api/v1")
app.include_router(token_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
