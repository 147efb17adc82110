"""Unit tests for the conversion plan builder."""

import logging

import pytest

from conversion_engine.core.constants import MAX_UINT256
from conversion_engine.core.exceptions import InvalidRequest
from conversion_engine.core.fixed_point import wad
from conversion_engine.core.models import ConversionRequest, EntryKind, EntryParams
from conversion_engine.engine.planner import ConversionPlanBuilder


def make_request(cm, bm, amount_in=1000 * 10**18, entry=None, **overrides) -> ConversionRequest:
    fields = dict(
        collateral_asset=cm.asset.address,
        borrow_asset=bm.asset.address,
        amount_in=amount_in,
        health_factor_target=wad(2),
        periods=1_000,
        entry=entry or EntryParams(),
    )
    fields.update(overrides)
    return ConversionRequest(**fields)


class TestConversionPlanBuilder:
    """Tests for ConversionPlanBuilder."""

    @pytest.fixture
    def builder(self, market_set, settings) -> ConversionPlanBuilder:
        return ConversionPlanBuilder(market_set, settings, converter="Keom")

    def test_scenario_plan(self, builder, collateral_market, borrow_market):
        plan = builder.build(make_request(collateral_market, borrow_market))

        assert not plan.is_null
        assert plan.converter == "Keom"
        assert plan.collateral_amount == 1000 * 10**18
        assert plan.amount_to_borrow == 425 * 10**18
        assert plan.max_amount_to_borrow == borrow_market.cash
        assert plan.max_amount_to_supply == MAX_UINT256
        assert plan.ltv == collateral_market.collateral_factor
        assert plan.liquidation_threshold == borrow_market.liquidation_threshold
        assert plan.collateral_value_in_borrow_asset36 == 1000 * 10**36
        assert plan.borrow_cost36 > 0
        assert plan.supply_income36 > 0

    def test_exact_borrow_plan(self, builder, collateral_market, borrow_market):
        entry = EntryParams(EntryKind.EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN)
        plan = builder.build(
            make_request(collateral_market, borrow_market, amount_in=425 * 10**18, entry=entry)
        )
        assert plan.amount_to_borrow == 425 * 10**18
        assert plan.collateral_amount == 1000 * 10**18

    def test_cross_decimal_plan(self, builder, wbtc_market, usdc_market):
        plan = builder.build(make_request(wbtc_market, usdc_market, amount_in=10**8))
        # 30000 * 0.8 / 2, clamped by nothing
        assert plan.amount_to_borrow == 12_000 * 10**6
        assert plan.collateral_value_in_borrow_asset36 == 30_000 * 10**36

    def test_amounts_within_limits(self, builder, collateral_market, usdc_market):
        plan = builder.build(make_request(collateral_market, usdc_market, amount_in=10**30))
        assert plan.amount_to_borrow == plan.max_amount_to_borrow == usdc_market.cash
        assert plan.collateral_amount <= plan.max_amount_to_supply

    def test_capacity_clamp(self, set_with, settings, collateral_market, market_factory):
        bm = market_factory(
            address="0xb0", cash=10**24, total_borrows=5 * 10**23,
            borrow_cap=5 * 10**23 + 7 * 10**18,
        )
        builder = ConversionPlanBuilder(set_with(collateral_market, bm), settings, "Keom")
        plan = builder.build(make_request(collateral_market, bm))
        assert plan.max_amount_to_borrow == 7 * 10**18
        assert plan.amount_to_borrow == 7 * 10**18

    def test_capacity_exhausted(self, set_with, settings, collateral_market, market_factory):
        bm = market_factory(address="0xb0", total_borrows=10**20, borrow_cap=10**20)
        builder = ConversionPlanBuilder(set_with(collateral_market, bm), settings, "Keom")
        for entry in (
            EntryParams(EntryKind.EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT),
            EntryParams(EntryKind.EXACT_PROPORTIONS, 1, 1),
            EntryParams(EntryKind.EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN),
        ):
            plan = builder.build(make_request(collateral_market, bm, entry=entry))
            assert not plan.is_null
            assert plan.max_amount_to_borrow == 0
            assert plan.amount_to_borrow == 0


class TestNullPlan:
    """Markets that cannot take part in a conversion produce the null plan."""

    @pytest.mark.parametrize("collateral_flags,borrow_flags", [
        ({"mint_paused": True}, {}),
        ({}, {"borrow_paused": True}),
        ({"frozen": True}, {}),
        ({}, {"frozen": True}),
        ({}, {"borrowing_enabled": False}),
        ({"collateral_factor": 0}, {}),
        ({}, {"collateral_factor": 0, "liquidation_threshold": 0}),
        ({"price": 0}, {}),
    ])
    def test_unavailable_markets(
        self, set_with, settings, market_factory, collateral_flags, borrow_flags
    ):
        cm = market_factory(address="0xc0", **collateral_flags)
        bm = market_factory(address="0xb0", **borrow_flags)
        builder = ConversionPlanBuilder(set_with(cm, bm), settings, "Keom")

        plan = builder.build(make_request(cm, bm))
        assert plan.is_null
        assert plan.converter is None

    def test_mint_paused_for_every_entry_kind(self, set_with, settings, market_factory):
        cm = market_factory(address="0xc0", mint_paused=True)
        bm = market_factory(address="0xb0")
        builder = ConversionPlanBuilder(set_with(cm, bm), settings)
        for entry in (EntryParams(kind=0), EntryParams(kind=1, x=2, y=3), EntryParams(kind=2)):
            assert builder.build(make_request(cm, bm, entry=entry)).is_null

    def test_unregistered_assets(self, market_set, settings, collateral_market, borrow_market):
        builder = ConversionPlanBuilder(market_set, settings)
        request = make_request(collateral_market, borrow_market, borrow_asset="0xdead")
        assert builder.build(request).is_null
        request = make_request(collateral_market, borrow_market, collateral_asset="0xdead")
        assert builder.build(request).is_null

    def test_null_plan_is_logged(self, set_with, settings, market_factory, caplog):
        cm = market_factory(address="0xc0", mint_paused=True)
        bm = market_factory(address="0xb0")
        builder = ConversionPlanBuilder(set_with(cm, bm), settings, "Keom")
        with caplog.at_level(logging.WARNING):
            builder.build(make_request(cm, bm))
        assert "mint is paused" in caplog.text


class TestRequestValidation:
    """Malformed requests raise instead of returning the null plan."""

    @pytest.mark.parametrize("overrides", [
        {"amount_in": 0},
        {"periods": 0},
        {"health_factor_target": wad(1)},
        {"borrow_asset": "0x0000000000000000000000000000000000000000"},
    ])
    def test_invalid_request(self, market_set, settings, collateral_market, borrow_market, overrides):
        builder = ConversionPlanBuilder(market_set, settings)
        with pytest.raises(InvalidRequest):
            builder.build(make_request(collateral_market, borrow_market, **overrides))

    def test_validation_precedes_availability(self, set_with, settings, market_factory):
        cm = market_factory(address="0xc0", mint_paused=True)
        bm = market_factory(address="0xb0")
        builder = ConversionPlanBuilder(set_with(cm, bm), settings)
        with pytest.raises(InvalidRequest):
            builder.build(make_request(cm, bm, amount_in=0))
