"""Base interest rate model interface."""

from abc import ABC, abstractmethod
from typing import List, Tuple

from conversion_engine.core.constants import WAD


class InterestRateModel(ABC):
    """
    Abstract interest rate model.

    Rates are 18-decimal fractions per rate period (a block or a second,
    depending on the protocol). Pool balances are in asset units.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a human-readable model name."""
        ...

    @abstractmethod
    def borrow_rate(self, cash: int, total_borrows: int, total_reserves: int) -> int:
        """
        Calculate the borrow rate for given pool balances.

        Args:
            cash: Pool cash in asset units
            total_borrows: Outstanding borrows in asset units
            total_reserves: Reserves in asset units

        Returns:
            Borrow rate per period (18 decimals)
        """
        ...

    @abstractmethod
    def supply_rate(
        self,
        cash: int,
        total_borrows: int,
        total_reserves: int,
        reserve_factor: int,
    ) -> int:
        """
        Calculate the supply rate for given pool balances.

        Args:
            cash: Pool cash in asset units
            total_borrows: Outstanding borrows in asset units
            total_reserves: Reserves in asset units
            reserve_factor: Share of interest set aside for reserves (18 decimals)

        Returns:
            Supply rate per period (18 decimals)
        """
        ...

    @staticmethod
    def utilization(cash: int, total_borrows: int, total_reserves: int) -> int:
        """
        Calculate utilization as borrows / (cash + borrows - reserves).

        Returns:
            Utilization (18 decimals), 0 for an empty pool
        """
        if total_borrows == 0:
            return 0
        supplied = cash + total_borrows - total_reserves
        if supplied <= 0:
            return WAD
        return total_borrows * WAD // supplied

    def generate_rate_curve(
        self,
        total_liquidity: int,
        reserve_factor: int = 0,
        num_points: int = 20,
    ) -> Tuple[List[int], List[int], List[int]]:
        """
        Generate the rate curve over utilization for a pool of fixed size.

        Args:
            total_liquidity: cash + borrows of the sampled pool
            reserve_factor: Reserve factor (18 decimals)
            num_points: Number of intervals

        Returns:
            Tuple of (utilizations, borrow_rates, supply_rates), 18 decimals each
        """
        utilizations = []
        borrow_rates = []
        supply_rates = []

        for i in range(num_points + 1):
            borrows = total_liquidity * i // num_points
            cash = total_liquidity - borrows

            utilizations.append(self.utilization(cash, borrows, 0))
            borrow_rates.append(self.borrow_rate(cash, borrows, 0))
            supply_rates.append(self.supply_rate(cash, borrows, 0, reserve_factor))

        return utilizations, borrow_rates, supply_rates
