"""Health factor rebalancing of open positions."""

import logging
from typing import Optional, Tuple

from config.settings import EngineSettings, get_settings
from conversion_engine.core.constants import MAX_UINT256, WAD
from conversion_engine.core.exceptions import HealthFactorViolation, InvalidRequest
from conversion_engine.core.fixed_point import mul_div
from conversion_engine.core.models import (
    HealthStatus,
    MarketSet,
    MarketSnapshot,
    Position,
    RebalanceDirection,
    RebalancePlan,
)
from conversion_engine.engine.capacity import CapacityLimiter
from conversion_engine.engine.entry_kinds import EntryKindResolver

logger = logging.getLogger(__name__)


class RebalanceEngine:
    """
    Engine moving a position's health factor toward a target.

    A position above target may borrow more; a position below target is
    repaired by a repay the caller requests, and the engine only checks
    the consequence. A healthy position must not lose more than the
    configured fraction of its health factor, a distressed one may.
    """

    def __init__(self, markets: MarketSet, settings: Optional[EngineSettings] = None):
        self.markets = markets
        self.settings = settings or get_settings()

    def _markets_for(self, position: Position) -> Tuple[MarketSnapshot, MarketSnapshot]:
        collateral_market = self.markets.snapshot(position.collateral_asset)
        borrow_market = self.markets.snapshot(position.borrow_asset)
        if collateral_market is None:
            raise InvalidRequest(f"Collateral asset is not registered: {position.collateral_asset}")
        if borrow_market is None:
            raise InvalidRequest(f"Borrow asset is not registered: {position.borrow_asset}")
        if collateral_market.price == 0 or borrow_market.price == 0:
            raise InvalidRequest(
                f"Zero price for {collateral_market.asset.name}/{borrow_market.asset.name}"
            )
        return collateral_market, borrow_market

    @staticmethod
    def _health_factor(
        collateral_amount: int,
        debt_amount: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> int:
        """
        HF = collateral * price_collateral * LT / (debt * price_borrow)

        Returns MAX_UINT256 for a position without debt.
        """
        if debt_amount == 0:
            return MAX_UINT256
        lt = EntryKindResolver.liquidation_threshold(collateral_market, borrow_market)
        return mul_div(
            collateral_amount * collateral_market.price * lt,
            10**borrow_market.decimals,
            debt_amount * borrow_market.price * 10**collateral_market.decimals,
        )

    def health_factor(self, position: Position) -> int:
        """
        Calculate the current health factor of a position.

        Args:
            position: Open position

        Returns:
            Health factor (18 decimals), MAX_UINT256 if there is no debt

        Raises:
            InvalidRequest: If an asset is not registered or has no price
        """
        collateral_market, borrow_market = self._markets_for(position)
        return self._health_factor(
            position.collateral_amount, position.debt_amount, collateral_market, borrow_market
        )

    def health_status(self, position: Position) -> HealthStatus:
        """
        Classify a position for a keeper.

        A position without debt is HEALTHY: there is nothing to rebalance.
        """
        if position.debt_amount == 0:
            return HealthStatus.HEALTHY

        hf = self.health_factor(position)
        if hf < self.settings.min_health_factor18:
            return HealthStatus.UNHEALTHY
        if hf > self.settings.too_healthy_health_factor18:
            return HealthStatus.TOO_HEALTHY
        return HealthStatus.HEALTHY

    def validate_health_factor(self, before: int, after: int) -> None:
        """
        Reject an action degrading a healthy position beyond tolerance.

        The drop is measured relative to the health factor before the action.
        No check is made if the position was already below the minimum.
        Repays planned by compute() only raise the health factor, so there
        it never fires; it guards actions built outside this engine.

        Raises:
            HealthFactorViolation: If the position was healthy and loses more
                than max_allowed_health_factor_reduction of its health factor
        """
        if before < self.settings.min_health_factor18 or after >= before:
            return

        reduction = self.settings.max_allowed_health_factor_reduction18
        if (before - after) * WAD > reduction * before:
            logger.warning(f"Rejected action: health factor {before} -> {after}")
            raise HealthFactorViolation(before, after)

    def compute(
        self,
        position: Position,
        target_health_factor: int,
        requested_direction: Optional[RebalanceDirection] = None,
        requested_amount: Optional[int] = None,
    ) -> RebalancePlan:
        """
        Compute a rebalance plan for an open position.

        Args:
            position: Open position
            target_health_factor: Target health factor (18 decimals)
            requested_direction: Repay direction, required below target
            requested_amount: Repay amount, required below target

        Returns:
            RebalancePlan with the direction, amount and resulting health factor

        Raises:
            InvalidRequest: If the target is too low, an asset is unknown or
                a repay is needed but not properly requested
            HealthFactorViolation: If the action would degrade a healthy position
        """
        if target_health_factor < self.settings.min_health_factor18:
            raise InvalidRequest(
                f"Target health factor {target_health_factor} is below "
                f"minimum {self.settings.min_health_factor18}"
            )

        collateral_market, borrow_market = self._markets_for(position)
        current = self._health_factor(
            position.collateral_amount, position.debt_amount, collateral_market, borrow_market
        )

        if position.debt_amount == 0 or current == target_health_factor:
            return self._no_action(current)

        if current > target_health_factor:
            if requested_direction not in (None, RebalanceDirection.BORROW_MORE):
                logger.debug(
                    f"Ignoring requested {requested_direction.value}: "
                    f"health factor {current} is above target {target_health_factor}"
                )
            plan = self._borrow_more(
                position, target_health_factor, current, collateral_market, borrow_market
            )
        else:
            plan = self._repay(
                position, requested_direction, requested_amount,
                current, collateral_market, borrow_market,
            )

        logger.info(
            f"Rebalance {position.collateral_asset}/{position.borrow_asset}: "
            f"{plan.direction.value} {plan.amount}, "
            f"health factor {plan.current_health_factor} -> {plan.resulting_health_factor}"
        )
        return plan

    def _no_action(self, current: int) -> RebalancePlan:
        return RebalancePlan(
            direction=RebalanceDirection.NO_ACTION_NEEDED,
            amount=0,
            resulting_health_factor=current,
            current_health_factor=current,
        )

    def _borrow_more(
        self,
        position: Position,
        target_health_factor: int,
        current: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> RebalancePlan:
        if borrow_market.frozen or borrow_market.borrow_paused or not borrow_market.borrowing_enabled:
            logger.debug(f"Borrow market {borrow_market.asset.name} does not accept borrows")
            return self._no_action(current)

        lt = EntryKindResolver.liquidation_threshold(collateral_market, borrow_market)
        target_debt = EntryKindResolver.borrow_for_collateral(
            position.collateral_amount, target_health_factor, lt, collateral_market, borrow_market
        )
        amount = min(
            target_debt - position.debt_amount,
            CapacityLimiter.max_amount_to_borrow(borrow_market),
        )
        if amount <= 0:
            return self._no_action(current)

        resulting = self._health_factor(
            position.collateral_amount,
            position.debt_amount + amount,
            collateral_market,
            borrow_market,
        )
        # Dropping to the target is intended, dropping below the minimum is not
        if resulting < self.settings.min_health_factor18:
            logger.warning(f"Rejected borrow: health factor {current} -> {resulting}")
            raise HealthFactorViolation(current, resulting)

        return RebalancePlan(
            direction=RebalanceDirection.BORROW_MORE,
            amount=amount,
            resulting_health_factor=resulting,
            current_health_factor=current,
        )

    def _repay(
        self,
        position: Position,
        direction: Optional[RebalanceDirection],
        amount: Optional[int],
        current: int,
        collateral_market: MarketSnapshot,
        borrow_market: MarketSnapshot,
    ) -> RebalancePlan:
        if direction is None or not direction.is_repay:
            raise InvalidRequest(
                f"Health factor {current} is below target: a repay direction is required"
            )
        if amount is None or amount <= 0:
            raise InvalidRequest(f"Repay amount must be positive, got {amount}")

        collateral_amount = position.collateral_amount
        debt_amount = position.debt_amount
        if direction == RebalanceDirection.REPAY_WITH_BORROW_ASSET:
            if amount > debt_amount:
                raise InvalidRequest(f"Repay amount {amount} exceeds debt {debt_amount}")
            debt_amount -= amount
        else:
            collateral_amount += amount

        resulting = self._health_factor(
            collateral_amount, debt_amount, collateral_market, borrow_market
        )
        self.validate_health_factor(current, resulting)

        return RebalancePlan(
            direction=direction,
            amount=amount,
            resulting_health_factor=resulting,
            current_health_factor=current,
        )
