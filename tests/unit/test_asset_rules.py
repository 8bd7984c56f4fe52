"""Tests for pk_asset domain: tokenization checks and yield."""

import pytest

from src.pk_asset.domain.models import ParkingAsset, calculate_yield, token_denomination_for
from src.pk_asset.domain.rules import (
    MAX_SPOT_LABEL_BYTES,
    check_listable,
    check_parking_lot_id,
    check_spot_label,
    check_tradeable,
    validate_tokenization,
)
from src.pk_common.amounts import MAX_AMOUNT
from src.pk_common.errors import (
    AssetNotActiveError,
    AssetNotTradeableError,
    ComplianceNotMetError,
    InvalidAmountError,
    InvalidLabelError,
    InvalidRevenueSharePercentageError,
)


def _make_asset(**kwargs) -> ParkingAsset:  # type: ignore[no-untyped-def]
    defaults = dict(
        id="AST-abc",
        token_denomination="PKA-abc",
        asset_type="SINGLE_SPOT",
        parking_lot_id=7,
        spot_label="A-42",
        total_supply=1000,
        circulating_supply=1000,
        estimated_value=50000,
        annual_revenue=5000,
        revenue_share_bps=8000,
        institutional_operator="operator-1",
        compliance_status="PENDING",
        is_active=True,
        is_tradeable=True,
        created_at=1_700_000_000,
    )
    defaults.update(kwargs)
    return ParkingAsset(**defaults)


class TestValidateTokenization:
    def test_valid_inputs(self) -> None:
        validate_tokenization("A-42", 1000, 50000, 5000, 8000)

    def test_zero_supply_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_tokenization("A-42", 0, 50000, 5000, 8000)

    def test_supply_above_bigint_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_tokenization("A-42", 2**63, 50000, 5000, 8000)

    def test_share_10001_raises(self) -> None:
        with pytest.raises(InvalidRevenueSharePercentageError):
            validate_tokenization("A-42", 1000, 50000, 5000, 10001)

    def test_share_exactly_10000_ok(self) -> None:
        validate_tokenization("A-42", 1000, 50000, 5000, 10000)

    def test_negative_valuation_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_tokenization("A-42", 1000, -1, 5000, 8000)

    def test_supply_checked_before_label(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_tokenization("x" * 40, 0, 50000, 5000, 8000)


class TestParkingLotId:
    def test_zero_ok(self) -> None:
        check_parking_lot_id(0)

    def test_bigint_max_ok(self) -> None:
        check_parking_lot_id(MAX_AMOUNT)

    def test_above_bigint_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            check_parking_lot_id(MAX_AMOUNT + 1)

    def test_negative_raises(self) -> None:
        with pytest.raises(InvalidAmountError):
            check_parking_lot_id(-1)


class TestSpotLabel:
    def test_32_bytes_ok(self) -> None:
        check_spot_label("x" * MAX_SPOT_LABEL_BYTES)

    def test_33_bytes_raises(self) -> None:
        with pytest.raises(InvalidLabelError) as exc_info:
            check_spot_label("x" * 33)
        assert "33" in exc_info.value.message

    def test_limit_counts_utf8_bytes(self) -> None:
        # 11 characters, 33 bytes
        with pytest.raises(InvalidLabelError):
            check_spot_label("車" * 11)


class TestYield:
    def test_ten_percent(self) -> None:
        assert calculate_yield(50000, 5000) == 1000

    def test_zero_value_yields_zero(self) -> None:
        assert calculate_yield(0, 5000) == 0

    def test_floor(self) -> None:
        assert calculate_yield(3, 1) == 3333

    def test_method_on_asset(self) -> None:
        assert _make_asset().calculate_yield() == 1000


class TestListable:
    def test_active_tradeable_ok(self) -> None:
        check_listable(_make_asset())

    def test_inactive_checked_first(self) -> None:
        with pytest.raises(AssetNotActiveError):
            check_listable(_make_asset(is_active=False, is_tradeable=False))

    def test_not_tradeable(self) -> None:
        with pytest.raises(AssetNotTradeableError):
            check_listable(_make_asset(is_tradeable=False))

    def test_compliance_gate_off_by_default(self) -> None:
        check_listable(_make_asset(compliance_status="NON_COMPLIANT"))

    def test_compliance_gate_on(self) -> None:
        with pytest.raises(ComplianceNotMetError):
            check_listable(_make_asset(compliance_status="PENDING"), require_compliance=True)

    @pytest.mark.parametrize("status", ["VERIFIED", "COMPLIANT"])
    def test_compliance_gate_passes(self, status: str) -> None:
        check_listable(_make_asset(compliance_status=status), require_compliance=True)

    def test_check_tradeable(self) -> None:
        with pytest.raises(AssetNotTradeableError):
            check_tradeable(_make_asset(is_tradeable=False))


def test_token_denomination_for() -> None:
    assert token_denomination_for("AST-0123abcd") == "PKA-0123abcd"
