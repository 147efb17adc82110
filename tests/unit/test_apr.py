"""Unit tests for borrow cost and supply income prediction."""

import pytest

from conversion_engine.core.exceptions import UnknownInterestRateModel
from conversion_engine.core.models import ConversionPlan, MarketSet
from conversion_engine.engine.apr import AprPredictor, plan_apr18


def make_plan(borrow_cost36: int, supply_income36: int, collateral_value36: int) -> ConversionPlan:
    return ConversionPlan(
        converter="test",
        collateral_amount=1,
        amount_to_borrow=1,
        max_amount_to_borrow=1,
        max_amount_to_supply=1,
        ltv=0,
        liquidation_threshold=0,
        borrow_cost36=borrow_cost36,
        supply_income36=supply_income36,
        collateral_value_in_borrow_asset36=collateral_value36,
    )


class TestAprPredictor:
    """Tests for AprPredictor."""

    @pytest.fixture
    def predictor(self, market_set) -> AprPredictor:
        return AprPredictor(market_set)

    def test_rate_identity(self, predictor, collateral_market, borrow_market):
        """Predicting a zero conversion reproduces the observed rates."""
        prediction = predictor.predict(borrow_market, 0, collateral_market, 0, 100)
        assert prediction.borrow_rate == predictor.current_rates(borrow_market)[0]
        assert prediction.supply_rate == predictor.current_rates(collateral_market)[1]
        assert prediction.borrow_cost36 == 0
        assert prediction.supply_income36 == 0

    def test_borrow_rate_increases_with_amount(self, predictor, borrow_market):
        rates = [
            predictor.predict_borrow_rate(borrow_market, step * 10**22)
            for step in range(10)
        ]
        assert all(a < b for a, b in zip(rates, rates[1:]))

    def test_supply_rate_decreases_with_collateral(self, predictor, collateral_market):
        rates = [
            predictor.predict_supply_rate(collateral_market, step * 10**22)
            for step in range(10)
        ]
        assert all(a > b for a, b in zip(rates, rates[1:]))

    def test_borrow_cost(self, predictor, wbtc_market, usdc_market):
        amount, periods = 1_000 * 10**6, 100
        prediction = predictor.predict(usdc_market, amount, wbtc_market, 10**8, periods)
        expected = prediction.borrow_rate * amount * periods * 10**36 // (10**18 * 10**6)
        assert prediction.borrow_cost36 == expected
        assert prediction.borrow_cost36 > 0

    def test_supply_income_is_revalued(self, predictor, wbtc_market, usdc_market):
        collateral, periods = 10**8, 100
        prediction = predictor.predict(usdc_market, 1_000 * 10**6, wbtc_market, collateral, periods)
        # 1 WBTC at 30000.00 earns 30000 times the rate, in USDC
        expected = (
            prediction.supply_rate * periods * collateral * wbtc_market.price * 10**36
            // (10**18 * usdc_market.price * 10**8)
        )
        assert prediction.supply_income36 == expected
        assert prediction.supply_income36 == prediction.supply_rate * periods * 30_000 * 10**18

    def test_unknown_rate_model(self, collateral_market, borrow_market):
        predictor = AprPredictor(MarketSet.from_markets([collateral_market, borrow_market]))
        with pytest.raises(UnknownInterestRateModel):
            predictor.predict(borrow_market, 1, collateral_market, 1, 1)


class TestPlanApr:
    """Tests for plan_apr18."""

    def test_cost_relative_to_collateral(self):
        plan = make_plan(10 * 10**36, 0, 1_000 * 10**36)
        assert plan_apr18(plan, periods=10) == 10**16

    def test_annualized(self):
        plan = make_plan(10 * 10**36, 0, 1_000 * 10**36)
        assert plan_apr18(plan, periods=10, periods_per_year=100) == 10**17

    def test_income_above_cost_is_negative(self):
        plan = make_plan(0, 5 * 10**36, 1_000 * 10**36)
        assert plan_apr18(plan, periods=1) == -5 * 10**15

    def test_empty_plan(self):
        assert plan_apr18(ConversionPlan.null(), periods=10) == 0
