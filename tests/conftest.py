"""Shared test fixtures."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pk_common.database import get_db_session
from src.pk_gateway.auth.dependencies import Caller, get_caller
from src.pk_gateway.middleware.rate_limit import limit_purchases


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def caller() -> Caller:
    return Caller(identity="GBUYER", kyb_verified=False)


@pytest.fixture
def authed_client(client: AsyncClient, caller: Caller) -> Generator[AsyncClient, None, None]:
    """Client with the caller, DB session and purchase limiter stubbed out."""

    async def _db() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_caller] = lambda: caller
    app.dependency_overrides[limit_purchases] = lambda: caller
    yield client
    app.dependency_overrides.clear()
