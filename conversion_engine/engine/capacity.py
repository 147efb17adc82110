"""Borrow and supply capacity of a market."""

import logging
from dataclasses import dataclass

from conversion_engine.core.constants import MAX_UINT256
from conversion_engine.core.models import MarketSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapacityLimits:
    """Maximum amounts a plan may borrow and supply (asset units)."""

    max_amount_to_borrow: int
    max_amount_to_supply: int


class CapacityLimiter:
    """
    Calculator for market capacity limits.

    Lending platforms cap borrowing, not supplying, so supply
    capacity is always unbounded.
    """

    @staticmethod
    def max_amount_to_borrow(borrow_market: MarketSnapshot) -> int:
        """
        Calculate how much can be borrowed from a market.

        - No borrow cap: limited by pool liquidity only
        - Cap already reached: nothing can be borrowed
        - Otherwise: min(cash, cap - borrows)
        """
        if borrow_market.borrow_cap == 0:
            return borrow_market.cash

        if borrow_market.total_borrows >= borrow_market.borrow_cap:
            logger.debug(
                f"Borrow cap exceeded for {borrow_market.asset.name}: "
                f"{borrow_market.total_borrows} >= {borrow_market.borrow_cap}"
            )
            return 0

        return min(borrow_market.cash, borrow_market.borrow_cap - borrow_market.total_borrows)

    @staticmethod
    def max_amount_to_supply() -> int:
        """Supply capacity, always unbounded."""
        return MAX_UINT256

    @classmethod
    def limits(cls, borrow_market: MarketSnapshot) -> CapacityLimits:
        """Calculate both limits for a borrow market."""
        return CapacityLimits(
            max_amount_to_borrow=cls.max_amount_to_borrow(borrow_market),
            max_amount_to_supply=cls.max_amount_to_supply(),
        )
