"""Conversion plan builder for a single lending platform."""

import logging
from typing import Optional

from config.settings import EngineSettings, get_settings
from conversion_engine.core.constants import RESULT_DECIMALS
from conversion_engine.core.fixed_point import convert_units
from conversion_engine.core.models import (
    ConversionPlan,
    ConversionRequest,
    MarketSet,
    MarketSnapshot,
)
from conversion_engine.engine.apr import AprPredictor
from conversion_engine.engine.capacity import CapacityLimiter
from conversion_engine.engine.entry_kinds import EntryKindResolver

logger = logging.getLogger(__name__)


class ConversionPlanBuilder:
    """
    Builder of conversion plans over the markets of one platform.

    A malformed request raises InvalidRequest. A market that cannot take
    part in a conversion (unregistered, frozen, paused) produces the null
    plan instead, which is a regular outcome for the caller to skip.
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
        self.predictor = AprPredictor(markets)

    def unavailable_reason(
        self,
        collateral_market: Optional[MarketSnapshot],
        borrow_market: Optional[MarketSnapshot],
    ) -> Optional[str]:
        """
        Explain why a market pair cannot produce a plan.

        Returns:
            Reason string, or None if both markets are usable
        """
        if collateral_market is None:
            return "collateral asset is not registered"
        if borrow_market is None:
            return "borrow asset is not registered"
        if collateral_market.frozen:
            return "collateral market is frozen"
        if borrow_market.frozen:
            return "borrow market is frozen"
        if collateral_market.mint_paused:
            return "collateral market mint is paused"
        if borrow_market.borrow_paused:
            return "borrow market borrow is paused"
        if not borrow_market.borrowing_enabled:
            return "borrow asset is not borrowable"
        if collateral_market.collateral_factor == 0:
            return "collateral asset cannot be used as collateral"
        if EntryKindResolver.liquidation_threshold(collateral_market, borrow_market) == 0:
            return "liquidation threshold is zero"
        if collateral_market.price == 0 or borrow_market.price == 0:
            return "price is zero"
        return None

    def build(self, request: ConversionRequest) -> ConversionPlan:
        """
        Build a conversion plan.

        Args:
            request: Conversion request

        Returns:
            ConversionPlan, or the null plan if the markets are unavailable

        Raises:
            InvalidRequest: If the request is malformed
        """
        EntryKindResolver.validate_request(request, self.settings.min_health_factor18)

        collateral_market = self.markets.snapshot(request.collateral_asset)
        borrow_market = self.markets.snapshot(request.borrow_asset)

        reason = self.unavailable_reason(collateral_market, borrow_market)
        if reason:
            logger.warning(
                f"No plan on {self.converter or 'platform'} for "
                f"{request.collateral_asset} -> {request.borrow_asset}: {reason}"
            )
            return ConversionPlan.null()

        limits = CapacityLimiter.limits(borrow_market)
        amounts = EntryKindResolver.resolve(
            request.entry,
            request.amount_in,
            collateral_market,
            borrow_market,
            request.health_factor_target,
            limits,
        )
        prediction = self.predictor.predict(
            borrow_market,
            amounts.amount_to_borrow,
            collateral_market,
            amounts.collateral_amount,
            request.periods,
        )

        plan = ConversionPlan(
            converter=self.converter,
            collateral_amount=amounts.collateral_amount,
            amount_to_borrow=amounts.amount_to_borrow,
            max_amount_to_borrow=limits.max_amount_to_borrow,
            max_amount_to_supply=limits.max_amount_to_supply,
            ltv=collateral_market.collateral_factor,
            liquidation_threshold=EntryKindResolver.liquidation_threshold(
                collateral_market, borrow_market
            ),
            borrow_cost36=prediction.borrow_cost36,
            supply_income36=prediction.supply_income36,
            collateral_value_in_borrow_asset36=convert_units(
                amounts.collateral_amount,
                collateral_market.price,
                collateral_market.decimals,
                borrow_market.price,
                RESULT_DECIMALS,
            ),
        )

        logger.info(
            f"Plan on {self.converter or 'platform'} "
            f"{collateral_market.asset.name} -> {borrow_market.asset.name}: "
            f"collateral={plan.collateral_amount}, borrow={plan.amount_to_borrow} "
            f"(max {plan.max_amount_to_borrow})"
        )
        return plan
