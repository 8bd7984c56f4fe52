"""Unit tests for TradesRepository and PlatformConfigRepository."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

from config.settings import settings
from src.pk_admin.infrastructure.platform_config import PLATFORM_FEE_KEY, PlatformConfigRepository
from src.pk_trade.domain.models import Trade
from src.pk_trade.infrastructure.trades_repository import TradesRepository


def _make_trade_row(**kwargs: Any) -> MagicMock:
    row = MagicMock()
    row.id = kwargs.get("id", "00000000000000000042")
    row.listing_id = kwargs.get("listing_id", "00000000000000000001")
    row.asset_id = kwargs.get("asset_id", "AST-abc")
    row.buyer = kwargs.get("buyer", "buyer-1")
    row.seller = kwargs.get("seller", "seller-1")
    row.token_amount = kwargs.get("token_amount", 10)
    row.price_paid = kwargs.get("price_paid", 500)
    row.platform_fee = kwargs.get("platform_fee", 12)
    row.seller_proceeds = kwargs.get("seller_proceeds", 488)
    row.payment_denomination = kwargs.get("payment_denomination", "USDC")
    row.traded_at = kwargs.get("traded_at", 1_700_000_000)
    return row


def _db_returning(rows: list[Any]) -> AsyncMock:
    db = AsyncMock()
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows
    result_mock.fetchone.return_value = rows[0] if rows else None
    db.execute.return_value = result_mock
    return db


class TestTradesRepository:
    async def test_list_by_party_maps_rows(self) -> None:
        db = _db_returning([_make_trade_row(), _make_trade_row(id="00000000000000000041")])

        trades = await TradesRepository().list_by_party(db, "buyer-1", None, 21, None)

        assert [t.id for t in trades] == ["00000000000000000042", "00000000000000000041"]
        assert trades[0].seller_proceeds == 488
        params = db.execute.call_args.args[1]
        assert params == {"identity": "buyer-1", "listing_id": None, "limit": 21, "cursor_id": None}

    async def test_list_by_party_empty(self) -> None:
        db = _db_returning([])
        assert await TradesRepository().list_by_party(db, "nobody", None, 21, None) == []

    async def test_get_by_id_missing(self) -> None:
        db = _db_returning([])
        assert await TradesRepository().get_by_id(db, "nope") is None

    async def test_insert_writes_all_columns(self) -> None:
        db = AsyncMock()
        trade = Trade(
            id="00000000000000000042",
            listing_id="00000000000000000001",
            asset_id="AST-abc",
            buyer="buyer-1",
            seller="seller-1",
            token_amount=10,
            price_paid=500,
            platform_fee=12,
            seller_proceeds=488,
            payment_denomination="USDC",
            traded_at=1_700_000_000,
        )

        await TradesRepository().insert(db, trade)

        params = db.execute.call_args.args[1]
        assert params["id"] == trade.id
        assert params["price_paid"] == 500
        assert params["platform_fee"] + params["seller_proceeds"] == params["price_paid"]

    async def test_volume_by_denomination(self) -> None:
        row = MagicMock()
        row.payment_denomination = "USDC"
        row.volume = 10_000
        row.fees = 250
        db = _db_returning([row])

        assert await TradesRepository().volume_by_denomination(db) == {"USDC": (10_000, 250)}


class TestPlatformConfigRepository:
    async def test_default_when_unset(self) -> None:
        db = AsyncMock()
        result_mock = MagicMock()
        result_mock.scalar_one_or_none.return_value = None
        db.execute.return_value = result_mock

        assert await PlatformConfigRepository().get_fee_bps(db) == settings.DEFAULT_PLATFORM_FEE_BPS

    async def test_stored_value(self) -> None:
        db = AsyncMock()
        result_mock = MagicMock()
        result_mock.scalar_one_or_none.return_value = 75
        db.execute.return_value = result_mock

        assert await PlatformConfigRepository().get_fee_bps(db) == 75

    async def test_set_upserts(self) -> None:
        db = AsyncMock()
        await PlatformConfigRepository().set_fee_bps(db, 300)
        assert db.execute.call_args.args[1] == {"key": PLATFORM_FEE_KEY, "value": 300}
