"""Conversion engine facade exposing plan building and rebalancing."""

import logging
from typing import Optional, Sequence

from config.settings import EngineSettings, get_settings
from conversion_engine.core.models import (
    ConversionPlan,
    ConversionRequest,
    EntryKind,
    EntryParams,
    MarketSet,
    Position,
    RebalanceDirection,
    RebalancePlan,
)
from conversion_engine.engine.apr import plan_apr18
from conversion_engine.engine.planner import ConversionPlanBuilder
from conversion_engine.engine.rebalance import RebalanceEngine
from conversion_engine.engine.selector import PlanSelector

logger = logging.getLogger(__name__)


class ConversionEngine:
    """
    Entry point for one lending platform.

    Holds the platform's markets and the engine settings; every call is
    a pure function of its arguments and this immutable state.
    """

    def __init__(
        self,
        markets: MarketSet,
        settings: Optional[EngineSettings] = None,
        converter: str = "",
    ):
        self.markets = markets
        self.settings = settings or get_settings()
        self.converter = converter
        self.planner = ConversionPlanBuilder(markets, self.settings, converter)
        self.rebalancer = RebalanceEngine(markets, self.settings)

    def build_conversion_plan(
        self,
        collateral_asset: str,
        borrow_asset: str,
        amount_in: int,
        entry_kind: int = EntryKind.EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT,
        entry_params: Sequence[int] = (),
        health_factor_target: Optional[int] = None,
        periods: int = 1,
    ) -> ConversionPlan:
        """
        Build a conversion plan.

        Args:
            collateral_asset: Collateral asset address
            borrow_asset: Borrow asset address
            amount_in: Input amount, its asset depends on the entry kind
            entry_kind: EntryKind value
            entry_params: Extra entry data, (x, y) for EXACT_PROPORTIONS
            health_factor_target: Target health factor (18 decimals),
                settings target if omitted
            periods: Number of rate periods to predict costs for

        Returns:
            ConversionPlan, the null plan if no plan is available

        Raises:
            InvalidRequest: If the request is malformed
        """
        request = ConversionRequest(
            collateral_asset=collateral_asset,
            borrow_asset=borrow_asset,
            amount_in=amount_in,
            health_factor_target=(
                self.settings.target_health_factor18
                if health_factor_target is None
                else health_factor_target
            ),
            periods=periods,
            entry=EntryParams.decode((int(entry_kind), *entry_params)),
        )
        return self.planner.build(request)

    def annual_apr18(self, plan: ConversionPlan, periods: int) -> int:
        """
        Annualized APR of a plan built for the given number of periods.

        The year length is the settings periods_per_year.

        Returns:
            Signed APR as an 18-decimal fraction
        """
        return plan_apr18(plan, periods, self.settings.periods_per_year)

    def selector(self, *others: "ConversionEngine") -> PlanSelector:
        """
        Selector ranking this platform and the given ones by annualized APR.

        Platforms are tried in the order given, this one first.
        """
        builders = [self.planner, *(engine.planner for engine in others)]
        return PlanSelector(builders, periods_per_year=self.settings.periods_per_year)

    def compute_rebalance(
        self,
        position: Position,
        target_health_factor: Optional[int] = None,
        requested_direction: Optional[RebalanceDirection] = None,
        requested_amount: Optional[int] = None,
    ) -> RebalancePlan:
        """
        Compute a rebalance plan for an open position.

        Args:
            position: Open position
            target_health_factor: Target health factor (18 decimals),
                settings target if omitted
            requested_direction: Repay direction chosen by the caller
            requested_amount: Repay amount chosen by the caller

        Raises:
            InvalidRequest: If the request is malformed
            HealthFactorViolation: If the action degrades a healthy position
        """
        if target_health_factor is None:
            target_health_factor = self.settings.target_health_factor18
        return self.rebalancer.compute(
            position, target_health_factor, requested_direction, requested_amount
        )
