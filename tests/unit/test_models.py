"""Unit tests for core data models."""

from decimal import Decimal

import pytest

from conversion_engine.core.exceptions import InvalidRequest, UnknownInterestRateModel
from conversion_engine.core.fixed_point import wad
from conversion_engine.core.models import (
    Asset,
    ConversionPlan,
    EntryKind,
    EntryParams,
    MarketSet,
    Position,
    RebalanceDirection,
    RebalancePlan,
)
from conversion_engine.rates.base import InterestRateModel


class TestEntryParams:
    """Tests for entry data decoding."""

    def test_empty_data_is_kind_zero(self):
        entry = EntryParams.decode([])
        assert entry.kind == EntryKind.EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT

    def test_decode_proportions(self):
        entry = EntryParams.decode([1, 3, 2])
        assert entry.kind == EntryKind.EXACT_PROPORTIONS
        assert (entry.x, entry.y) == (3, 2)

    def test_decode_exact_borrow(self):
        entry = EntryParams.decode((2,))
        assert entry.kind == EntryKind.EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN

    def test_proportions_require_weights(self):
        with pytest.raises(InvalidRequest):
            EntryParams.decode([1, 3])

    def test_unknown_kind(self):
        with pytest.raises(InvalidRequest):
            EntryParams.decode([7])
        with pytest.raises(InvalidRequest):
            EntryParams(kind=7)

    def test_int_kind_is_coerced(self):
        assert EntryParams(kind=2).kind is EntryKind.EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN

    def test_encode_decode(self):
        entry = EntryParams(kind=EntryKind.EXACT_PROPORTIONS, x=1, y=4)
        assert entry.encode() == (1, 1, 4)
        assert EntryParams.decode(entry.encode()) == entry


class TestMarketSnapshot:
    """Tests for market snapshot validation and derived values."""

    def test_liquidation_threshold_below_collateral_factor(self, market_factory):
        with pytest.raises(ValueError):
            market_factory(collateral_factor=wad("0.8"), liquidation_threshold=wad("0.7"))

    def test_negative_balance(self, market_factory):
        with pytest.raises(ValueError):
            market_factory(cash=-1)

    def test_utilization(self, market_factory):
        market = market_factory(cash=3 * 10**18, total_borrows=10**18)
        assert market.utilization == wad("0.25")

    def test_empty_pool_utilization(self, market_factory):
        assert market_factory(cash=0, total_borrows=0).utilization == 0

    def test_utilization_matches_rate_models(self, market_factory):
        market = market_factory(cash=0, total_borrows=10, total_reserves=20)
        assert market.utilization == InterestRateModel.utilization(0, 10, 20) == wad(1)

    def test_decimals_and_liquidity(self, usdc_market):
        assert usdc_market.decimals == 6
        assert usdc_market.available_liquidity == usdc_market.cash

    def test_price_decimal(self, wbtc_market):
        assert wbtc_market.price_decimal == Decimal("30000")


class TestMarketSet:
    """Tests for market lookup."""

    def test_lookup_is_case_insensitive(self, market_set, usdc_market):
        assert market_set.snapshot(usdc_market.asset.address.upper()) == usdc_market
        assert usdc_market.asset.address in market_set

    def test_unregistered_asset(self, market_set):
        assert market_set.snapshot("0xdead") is None
        assert market_set.snapshot("") is None

    def test_unknown_rate_model(self, market_set):
        with pytest.raises(UnknownInterestRateModel) as exc:
            market_set.rate_model("missing")
        assert "missing" in str(exc.value)

    def test_len(self, market_set):
        assert len(market_set) == 4
        assert len(MarketSet()) == 0


class TestAsset:
    """Tests for asset identifiers."""

    def test_zero_address(self):
        assert Asset("0x0000000000000000000000000000000000000000", 18).is_zero
        assert not Asset("0xabc", 18).is_zero

    def test_name_falls_back_to_address(self):
        assert Asset("0xabc", 18).name == "0xabc"
        assert Asset("0xabc", 18, "WETH").name == "WETH"


class TestPlans:
    """Tests for plan models."""

    def test_null_plan(self):
        plan = ConversionPlan.null()
        assert plan.is_null
        assert plan.amount_to_borrow == 0
        assert plan.to_dict()["converter"] is None

    def test_net_cost_may_be_negative(self):
        plan = ConversionPlan(
            converter="Keom",
            collateral_amount=1,
            amount_to_borrow=1,
            max_amount_to_borrow=1,
            max_amount_to_supply=1,
            ltv=0,
            liquidation_threshold=0,
            borrow_cost36=10,
            supply_income36=25,
            collateral_value_in_borrow_asset36=1,
        )
        assert not plan.is_null
        assert plan.net_cost36 == -15

    def test_repay_directions(self):
        assert RebalanceDirection.REPAY_WITH_BORROW_ASSET.is_repay
        assert RebalanceDirection.REPAY_WITH_COLLATERAL_ASSET.is_repay
        assert not RebalanceDirection.BORROW_MORE.is_repay
        assert not RebalanceDirection.NO_ACTION_NEEDED.is_repay

    def test_rebalance_plan_to_dict(self):
        plan = RebalancePlan(RebalanceDirection.BORROW_MORE, 5, wad(2), wad(3))
        assert plan.to_dict() == {
            "direction": "borrow_more",
            "amount": "5",
            "resulting_health_factor": str(wad(2)),
            "current_health_factor": str(wad(3)),
        }

    def test_position_rejects_negative_amounts(self):
        with pytest.raises(ValueError):
            Position("0xa", "0xb", -1, 0)
