"""Tests for the access-log middleware and request id correlation."""

import logging

import pytest
from fastapi import FastAPI, Response
from httpx import ASGITransport, AsyncClient

from src.pk_gateway.middleware.request_log import (
    REQUEST_ID_HEADER,
    RequestLogMiddleware,
    resolve_request_id,
)


class TestResolveRequestId:
    def test_generated_when_missing(self) -> None:
        rid = resolve_request_id(None)
        assert rid.startswith("req_")
        assert len(rid) == 16

    def test_client_id_kept(self) -> None:
        assert resolve_request_id("trace-42_A") == "trace-42_A"

    @pytest.mark.parametrize("bad", ["", "has space", "x" * 65, "abc\n", "ünicode"])
    def test_unsafe_client_id_replaced(self, bad: str) -> None:
        assert resolve_request_id(bad).startswith("req_")


class TestMiddleware:
    async def test_response_carries_generated_id(self, client: AsyncClient) -> None:
        resp = await client.get("/health")

        assert resp.status_code == 200
        assert resp.headers[REQUEST_ID_HEADER].startswith("req_")

    async def test_client_id_echoed(self, client: AsyncClient) -> None:
        resp = await client.get("/health", headers={REQUEST_ID_HEADER: "trace-42"})

        assert resp.headers[REQUEST_ID_HEADER] == "trace-42"

    async def test_server_error_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        app = FastAPI()
        app.add_middleware(RequestLogMiddleware)

        @app.get("/down")
        async def down() -> Response:
            return Response(status_code=503)

        transport = ASGITransport(app=app)
        with caplog.at_level(logging.INFO, logger="pk.request"):
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                await ac.get("/down")

        records = [r for r in caplog.records if r.name == "pk.request"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "/down" in records[0].getMessage()
