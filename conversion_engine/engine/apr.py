"""Prediction of borrow cost and supply income for a conversion."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from conversion_engine.core.constants import RESULT_DECIMALS, WAD
from conversion_engine.core.fixed_point import mul_div
from conversion_engine.core.models import ConversionPlan, MarketSet, MarketSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AprPrediction:
    """Predicted rates (18 decimals per period) and period figures (borrow asset, 36 decimals)."""

    borrow_rate: int
    supply_rate: int
    borrow_cost36: int
    supply_income36: int


class AprPredictor:
    """
    Predictor for the rates a pool would exhibit after a conversion.

    Borrowing raises utilization of the borrow market, supplying
    dilutes the collateral market, so rates are evaluated on the
    balances after the conversion rather than the current ones.
    """

    def __init__(self, markets: MarketSet):
        self.markets = markets

    def predict_borrow_rate(self, borrow_market: MarketSnapshot, amount_to_borrow: int) -> int:
        """Borrow rate after amount_to_borrow is added to the pool's borrows."""
        model = self.markets.rate_model(borrow_market.interest_rate_model_ref)
        return model.borrow_rate(
            borrow_market.cash,
            borrow_market.total_borrows + amount_to_borrow,
            borrow_market.total_reserves,
        )

    def predict_supply_rate(self, collateral_market: MarketSnapshot, collateral_amount: int) -> int:
        """Supply rate after collateral_amount is added to the pool's cash."""
        model = self.markets.rate_model(collateral_market.interest_rate_model_ref)
        return model.supply_rate(
            collateral_market.cash + collateral_amount,
            collateral_market.total_borrows,
            collateral_market.total_reserves,
            collateral_market.reserve_factor,
        )

    def current_rates(self, market: MarketSnapshot) -> Tuple[int, int]:
        """
        Currently observed (borrow_rate, supply_rate) of a market.

        Returns:
            Tuple of rates per period (18 decimals)
        """
        model = self.markets.rate_model(market.interest_rate_model_ref)
        return (
            model.borrow_rate(market.cash, market.total_borrows, market.total_reserves),
            model.supply_rate(
                market.cash, market.total_borrows, market.total_reserves, market.reserve_factor
            ),
        )

    @staticmethod
    def borrow_cost36(
        borrow_rate: int,
        amount_to_borrow: int,
        periods: int,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        Interest accrued on the borrow over the periods.

        cost = rate * amount * periods, in borrow asset scaled to 36 decimals
        """
        return mul_div(
            borrow_rate * amount_to_borrow * periods,
            10**RESULT_DECIMALS,
            WAD * 10**borrow_market.decimals,
        )

    @staticmethod
    def supply_income36(
        supply_rate: int,
        collateral_amount: int,
        periods: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        Income earned on the collateral over the periods, revalued into borrow asset.

        income = rate * periods * collateral * price_collateral / price_borrow,
        in borrow asset scaled to 36 decimals
        """
        return mul_div(
            supply_rate * periods * collateral_amount * collateral_market.price,
            10**RESULT_DECIMALS,
            WAD * borrow_market.price * 10**collateral_market.decimals,
        )

    def predict(
        self,
        borrow_market: MarketSnapshot,
        amount_to_borrow: int,
        collateral_market: MarketSnapshot,
        collateral_amount: int,
        periods: int,
    ) -> AprPrediction:
        """
        Predict rates and period figures for a conversion.

        Args:
            borrow_market: Borrow market snapshot
            amount_to_borrow: Amount to borrow (borrow asset units)
            collateral_market: Collateral market snapshot
            collateral_amount: Amount of collateral (collateral asset units)
            periods: Number of rate periods (blocks or seconds)

        Returns:
            AprPrediction with rates, borrow cost and supply income
        """
        borrow_rate = self.predict_borrow_rate(borrow_market, amount_to_borrow)
        supply_rate = self.predict_supply_rate(collateral_market, collateral_amount)

        prediction = AprPrediction(
            borrow_rate=borrow_rate,
            supply_rate=supply_rate,
            borrow_cost36=self.borrow_cost36(borrow_rate, amount_to_borrow, periods, borrow_market),
            supply_income36=self.supply_income36(
                supply_rate, collateral_amount, periods, collateral_market, borrow_market
            ),
        )
        logger.debug(
            f"Predicted rates {borrow_market.asset.name}/{collateral_market.asset.name}: "
            f"br={borrow_rate}, sr={supply_rate}, periods={periods}"
        )
        return prediction


def plan_apr18(
    plan: ConversionPlan,
    periods: int,
    periods_per_year: Optional[int] = None,
) -> int:
    """
    Net cost of a plan relative to the collateral value.

    apr = (borrow_cost - supply_income) / collateral_value

    Annualized when periods_per_year is given. The result is signed:
    a negative value means the supply income exceeds the borrow cost.

    Returns:
        APR as an 18-decimal fraction, 0 for an empty plan
    """
    if plan.collateral_value_in_borrow_asset36 == 0 or periods <= 0:
        return 0

    net = plan.net_cost36
    magnitude = abs(net) * WAD
    if periods_per_year:
        magnitude = magnitude * periods_per_year // periods
    apr = magnitude // plan.collateral_value_in_borrow_asset36
    return -apr if net < 0 else apr
