"""Open position and rebalance plan models."""

from dataclasses import dataclass
from enum import Enum


class RebalanceDirection(Enum):
    """Actions that move a position's health factor toward a target."""

    BORROW_MORE = "borrow_more"
    REPAY_WITH_BORROW_ASSET = "repay_with_borrow_asset"
    REPAY_WITH_COLLATERAL_ASSET = "repay_with_collateral_asset"
    NO_ACTION_NEEDED = "no_action_needed"

    @property
    def is_repay(self) -> bool:
        """True for the caller-requested repay directions."""
        return self in (
            RebalanceDirection.REPAY_WITH_BORROW_ASSET,
            RebalanceDirection.REPAY_WITH_COLLATERAL_ASSET,
        )


class HealthStatus(Enum):
    """Health classification of an open position."""

    UNHEALTHY = "unhealthy"      # Below the minimum health factor
    HEALTHY = "healthy"
    TOO_HEALTHY = "too_healthy"  # Room to borrow more


@dataclass(frozen=True)
class Position:
    """
    Open borrow as reported by the lending platform.

    Amounts are in their asset units.
    """

    collateral_asset: str
    borrow_asset: str
    collateral_amount: int
    debt_amount: int

    def __post_init__(self):
        if self.collateral_amount < 0 or self.debt_amount < 0:
            raise ValueError("Position amounts must be non-negative")


@dataclass(frozen=True)
class RebalancePlan:
    """
    Rebalance instruction for an open position.

    amount is in borrow asset units for BORROW_MORE and
    REPAY_WITH_BORROW_ASSET, in collateral asset units for
    REPAY_WITH_COLLATERAL_ASSET. Health factors are 18-decimal.
    """

    direction: RebalanceDirection
    amount: int
    resulting_health_factor: int
    current_health_factor: int

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "direction": self.direction.value,
            "amount": str(self.amount),
            "resulting_health_factor": str(self.resulting_health_factor),
            "current_health_factor": str(self.current_health_factor),
        }
