"""Tests for pk_revenue domain: per-token arithmetic, periods, payout transitions."""

import pytest

from src.pk_asset.domain.models import ParkingAsset
from src.pk_common.enums import DistributionStatus
from src.pk_common.errors import (
    AssetNotActiveError,
    DistributionAlreadyCompletedError,
    InvalidAmountError,
    InvalidDistributionTransitionError,
    InvalidRevenuePeriodError,
    UnauthorizedError,
)
from src.pk_revenue.domain.models import compute_net_revenue, compute_revenue_per_token
from src.pk_revenue.domain.rules import check_period, open_distribution, transition

NOW = 1_700_000_000


def _make_asset(**kwargs) -> ParkingAsset:  # type: ignore[no-untyped-def]
    defaults = dict(
        id="AST-abc",
        token_denomination="PKA-abc",
        asset_type="REVENUE_SHARE",
        parking_lot_id=7,
        spot_label="A-42",
        total_supply=1000,
        circulating_supply=1000,
        estimated_value=50000,
        annual_revenue=5000,
        revenue_share_bps=8000,
        institutional_operator="operator-1",
        compliance_status="VERIFIED",
        is_active=True,
        is_tradeable=True,
        created_at=NOW - 10_000,
    )
    defaults.update(kwargs)
    return ParkingAsset(**defaults)


def _distribute(**kwargs):  # type: ignore[no-untyped-def]
    args = dict(
        distribution_id="D-1",
        asset=_make_asset(),
        operator="operator-1",
        total_revenue=6000,
        operating_costs=1000,
        period_start=NOW - 3600,
        period_end=NOW - 60,
        now=NOW,
    )
    args.update(kwargs)
    return open_distribution(**args)


class TestArithmetic:
    def test_scenario(self) -> None:
        d = _distribute()
        assert d.net_revenue == 5000
        assert d.revenue_per_token == 5
        assert d.total_tokens_outstanding == 1000
        assert d.distribution_status == DistributionStatus.PENDING.value
        assert d.total_distributed == 0
        assert d.completed_at is None

    def test_costs_above_revenue_give_zero(self) -> None:
        assert compute_net_revenue(100, 500) == 0

    def test_zero_outstanding(self) -> None:
        assert compute_revenue_per_token(5000, 0) == 0

    @pytest.mark.parametrize(
        "net, outstanding",
        [(5000, 1000), (5001, 1000), (7, 3), (1, 2), (10**18, 7)],
    )
    def test_distributable_never_exceeds_net(self, net: int, outstanding: int) -> None:
        rpt = compute_revenue_per_token(net, outstanding)
        assert rpt * outstanding <= net
        assert net - rpt * outstanding < outstanding

    def test_dust(self) -> None:
        d = _distribute(total_revenue=5999, operating_costs=1000)
        assert d.revenue_per_token == 4
        assert d.distributable == 4000
        assert d.dust == 999

    def test_snapshot_uses_circulating_supply(self) -> None:
        d = _distribute(asset=_make_asset(circulating_supply=500))
        assert d.total_tokens_outstanding == 500
        assert d.revenue_per_token == 10


class TestOpenDistribution:
    def test_wrong_operator(self) -> None:
        with pytest.raises(UnauthorizedError):
            _distribute(operator="someone-else")

    def test_inactive_asset(self) -> None:
        with pytest.raises(AssetNotActiveError):
            _distribute(asset=_make_asset(is_active=False))

    def test_signer_checked_before_active(self) -> None:
        with pytest.raises(UnauthorizedError):
            _distribute(asset=_make_asset(is_active=False), operator="someone-else")

    def test_negative_revenue(self) -> None:
        with pytest.raises(InvalidAmountError):
            _distribute(total_revenue=-1)


class TestPeriod:
    def test_valid(self) -> None:
        check_period(NOW - 10, NOW, NOW)

    def test_empty_period(self) -> None:
        with pytest.raises(InvalidRevenuePeriodError):
            check_period(NOW - 10, NOW - 10, NOW)

    def test_reversed_period(self) -> None:
        with pytest.raises(InvalidRevenuePeriodError):
            check_period(NOW, NOW - 10, NOW)

    def test_period_not_over(self) -> None:
        with pytest.raises(InvalidRevenuePeriodError):
            check_period(NOW - 10, NOW + 1, NOW)


class TestTransition:
    def test_pending_to_processing_to_completed(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.PROCESSING, NOW + 1)
        assert d.distribution_status == DistributionStatus.PROCESSING.value
        transition(d, DistributionStatus.COMPLETED, NOW + 2)
        assert d.distribution_status == DistributionStatus.COMPLETED.value
        assert d.total_distributed == 5000
        assert d.completed_at == NOW + 2

    def test_completed_with_partial_payout(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.PROCESSING, NOW)
        transition(d, DistributionStatus.COMPLETED, NOW, total_distributed=4500)
        assert d.total_distributed == 4500

    def test_payout_above_distributable(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.PROCESSING, NOW)
        with pytest.raises(InvalidAmountError):
            transition(d, DistributionStatus.COMPLETED, NOW, total_distributed=5001)
        assert d.distribution_status == DistributionStatus.PROCESSING.value

    def test_pending_cannot_complete(self) -> None:
        d = _distribute()
        with pytest.raises(InvalidDistributionTransitionError):
            transition(d, DistributionStatus.COMPLETED, NOW)

    def test_pending_can_fail(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.FAILED, NOW)
        assert d.distribution_status == DistributionStatus.FAILED.value
        assert d.completed_at is None

    def test_completed_is_final(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.PROCESSING, NOW)
        transition(d, DistributionStatus.COMPLETED, NOW)
        with pytest.raises(DistributionAlreadyCompletedError):
            transition(d, DistributionStatus.FAILED, NOW)

    def test_failed_is_terminal(self) -> None:
        d = _distribute()
        transition(d, DistributionStatus.FAILED, NOW)
        with pytest.raises(InvalidDistributionTransitionError):
            transition(d, DistributionStatus.PROCESSING, NOW)
