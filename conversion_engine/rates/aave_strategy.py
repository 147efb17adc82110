"""Aave3 DefaultReserveInterestRateStrategy."""

from conversion_engine.core.constants import RAY, SECONDS_PER_YEAR, WAD
from conversion_engine.rates.base import InterestRateModel

# RAY annual -> WAD per second
_RAY_PER_WAD = RAY // WAD


class DefaultReserveRateStrategy(InterestRateModel):
    """
    Aave3 kinked variable rate curve.

    Parameters are annual rates in RAY (27 decimals), as stored by the
    strategy contract. Rates returned by the model are converted to
    18-decimal fractions per second so they can be combined with the
    other models:
    - Below optimal usage: rate = base + slope1 * U / U_opt
    - Above optimal usage: rate = base + slope1 + slope2 * (U - U_opt) / (1 - U_opt)

    Aave measures usage against cash + debt, reserves are not subtracted.
    """

    def __init__(
        self,
        optimal_usage_ratio: int,
        base_variable_borrow_rate: int,
        variable_rate_slope1: int,
        variable_rate_slope2: int,
        name: str = "DefaultReserveInterestRateStrategy",
    ):
        if not 0 < optimal_usage_ratio < RAY:
            raise ValueError(f"optimal_usage_ratio must be in (0, 1e27), got {optimal_usage_ratio}")
        self.optimal_usage_ratio = optimal_usage_ratio
        self.base_variable_borrow_rate = base_variable_borrow_rate
        self.variable_rate_slope1 = variable_rate_slope1
        self.variable_rate_slope2 = variable_rate_slope2
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @staticmethod
    def usage_ratio(cash: int, total_debt: int) -> int:
        """Usage ratio in RAY."""
        if total_debt == 0:
            return 0
        return total_debt * RAY // (cash + total_debt)

    def annual_borrow_rate(self, cash: int, total_debt: int) -> int:
        """Annual variable borrow rate in RAY."""
        usage = self.usage_ratio(cash, total_debt)
        rate = self.base_variable_borrow_rate

        if usage > self.optimal_usage_ratio:
            excess = (usage - self.optimal_usage_ratio) * RAY // (RAY - self.optimal_usage_ratio)
            return rate + self.variable_rate_slope1 + self.variable_rate_slope2 * excess // RAY

        return rate + self.variable_rate_slope1 * usage // self.optimal_usage_ratio

    def borrow_rate(self, cash: int, total_borrows: int, total_reserves: int) -> int:
        return self.annual_borrow_rate(cash, total_borrows) // _RAY_PER_WAD // SECONDS_PER_YEAR

    def supply_rate(
        self,
        cash: int,
        total_borrows: int,
        total_reserves: int,
        reserve_factor: int,
    ) -> int:
        usage = self.usage_ratio(cash, total_borrows)
        annual_rate = self.annual_borrow_rate(cash, total_borrows)
        annual_supply = annual_rate * usage // RAY * (WAD - reserve_factor) // WAD
        return annual_supply // _RAY_PER_WAD // SECONDS_PER_YEAR
