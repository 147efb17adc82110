"""Jump rate model used by Compound forks (Keom, Zerovix, Moonwell)."""

from conversion_engine.core.constants import WAD
from conversion_engine.rates.base import InterestRateModel


class JumpRateModel(InterestRateModel):
    """
    Compound JumpRateModelV2.

    The borrow rate grows linearly with utilization up to the kink and
    with the (steeper) jump multiplier above it:
    - Below kink: rate = base + util * multiplier
    - Above kink: rate = base + kink * multiplier + (util - kink) * jump_multiplier

    All parameters are 18-decimal fractions per period.
    """

    def __init__(
        self,
        base_rate_per_period: int,
        multiplier_per_period: int,
        jump_multiplier_per_period: int,
        kink: int,
        name: str = "JumpRateModel",
    ):
        if not 0 < kink <= WAD:
            raise ValueError(f"kink must be in (0, 1e18], got {kink}")
        self.base_rate_per_period = base_rate_per_period
        self.multiplier_per_period = multiplier_per_period
        self.jump_multiplier_per_period = jump_multiplier_per_period
        self.kink = kink
        self._name = name

    @classmethod
    def from_annual(
        cls,
        base_rate_per_year: int,
        multiplier_per_year: int,
        jump_multiplier_per_year: int,
        kink: int,
        periods_per_year: int,
        name: str = "JumpRateModel",
    ) -> "JumpRateModel":
        """
        Build the model from annual parameters, as the on-chain constructor does.

        Compound divides the multiplier by the kink so that the rate at the
        kink equals base + multiplier_per_year.
        """
        return cls(
            base_rate_per_period=base_rate_per_year // periods_per_year,
            multiplier_per_period=multiplier_per_year * WAD // (periods_per_year * kink),
            jump_multiplier_per_period=jump_multiplier_per_year // periods_per_year,
            kink=kink,
            name=name,
        )

    @property
    def name(self) -> str:
        return self._name

    def borrow_rate(self, cash: int, total_borrows: int, total_reserves: int) -> int:
        util = self.utilization(cash, total_borrows, total_reserves)

        if util <= self.kink:
            return util * self.multiplier_per_period // WAD + self.base_rate_per_period

        normal_rate = self.kink * self.multiplier_per_period // WAD + self.base_rate_per_period
        excess_util = util - self.kink
        return excess_util * self.jump_multiplier_per_period // WAD + normal_rate

    def supply_rate(
        self,
        cash: int,
        total_borrows: int,
        total_reserves: int,
        reserve_factor: int,
    ) -> int:
        one_minus_reserve_factor = WAD - reserve_factor
        borrow_rate = self.borrow_rate(cash, total_borrows, total_reserves)
        rate_to_pool = borrow_rate * one_minus_reserve_factor // WAD
        return self.utilization(cash, total_borrows, total_reserves) * rate_to_pool // WAD
