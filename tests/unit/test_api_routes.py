"""HTTP-level tests: routing, auth, response envelope and AppError mapping."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from src.pk_asset.api import router as asset_router_module
from src.pk_common.errors import AssetNotTradeableError, ListingExpiredError, ListingNotFoundError
from src.pk_gateway.auth.dependencies import Caller
from src.pk_listing.api import router as listing_router_module
from src.pk_listing.application.schemas import BuyResponse, ValidityResponse


@pytest.fixture
def listing_service(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    svc = MagicMock()
    for name in (
        "create_listing",
        "buy",
        "cancel_listing",
        "get_listing",
        "is_listing_valid",
        "list_active",
    ):
        setattr(svc, name, AsyncMock())
    monkeypatch.setattr(listing_router_module, "_service", svc)
    return svc


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestAuth:
    async def test_missing_token_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/listings")
        assert resp.status_code == 401

    async def test_bad_token_is_401(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/listings", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 401


class TestListingRoutes:
    async def test_buy_success_envelope(
        self, authed_client: AsyncClient, listing_service: MagicMock, caller: Caller
    ) -> None:
        listing_service.buy.return_value = BuyResponse(
            trade_id="00000000000000000042",
            listing_id="00000000000000000001",
            token_amount=10,
            purchase_price=500,
            platform_fee=12,
            seller_proceeds=488,
            payment_denomination="USDC",
            remaining_token_amount=990,
            listing_status="ACTIVE",
        )

        resp = await authed_client.post(
            "/api/v1/listings/00000000000000000001/buy",
            json={"token_amount": 10, "payment_denomination": "USDC"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["remaining_token_amount"] == 990
        assert body["request_id"].startswith("req_")
        args = listing_service.buy.call_args.args
        assert args[1:] == (caller.identity, "00000000000000000001", 10, "USDC", False)

    async def test_app_error_maps_to_envelope(
        self, authed_client: AsyncClient, listing_service: MagicMock
    ) -> None:
        listing_service.get_listing.side_effect = ListingNotFoundError("nope")

        resp = await authed_client.get("/api/v1/listings/nope")

        assert resp.status_code == 404
        body = resp.json()
        assert body["code"] == 4001
        assert body["data"] is None
        assert "nope" in body["message"]

    async def test_expired_buy_is_422(
        self, authed_client: AsyncClient, listing_service: MagicMock
    ) -> None:
        listing_service.buy.side_effect = ListingExpiredError("L-1")

        resp = await authed_client.post(
            "/api/v1/listings/L-1/buy", json={"token_amount": 1, "payment_denomination": "USDC"}
        )

        assert resp.status_code == 422
        assert resp.json()["code"] == 4003

    async def test_validity(self, authed_client: AsyncClient, listing_service: MagicMock) -> None:
        listing_service.is_listing_valid.return_value = ValidityResponse(
            listing_id="L-1", is_valid=False
        )

        resp = await authed_client.get("/api/v1/listings/L-1/validity")

        assert resp.status_code == 200
        assert resp.json()["data"] == {"listing_id": "L-1", "is_valid": False}

    async def test_list_limit_validated(
        self, authed_client: AsyncClient, listing_service: MagicMock
    ) -> None:
        resp = await authed_client.get("/api/v1/listings", params={"limit": 0})
        assert resp.status_code == 422
        listing_service.list_active.assert_not_awaited()


class TestAssetRoutes:
    async def test_set_tradeable_error(
        self, authed_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        svc = MagicMock()
        svc.set_tradeable = AsyncMock(side_effect=AssetNotTradeableError("AST-abc"))
        monkeypatch.setattr(asset_router_module, "_service", svc)

        resp = await authed_client.post("/api/v1/assets/AST-abc/tradeable", json={"value": False})

        assert resp.status_code == 422
        assert resp.json()["code"] == 3003

    async def test_tokenize_rejects_unknown_asset_type(self, authed_client: AsyncClient) -> None:
        resp = await authed_client.post(
            "/api/v1/assets",
            json={
                "parking_lot_id": 1,
                "spot_label": "A-1",
                "asset_type": "HELIPAD",
                "total_supply": 10,
                "estimated_value": 100,
                "annual_revenue": 10,
                "revenue_share_bps": 5000,
            },
        )
        assert resp.status_code == 422


class TestAdminRoutes:
    async def test_non_admin_rejected(self, authed_client: AsyncClient) -> None:
        resp = await authed_client.get("/api/v1/admin/platform-fee")
        assert resp.status_code == 403
        assert resp.json()["code"] == 1006
