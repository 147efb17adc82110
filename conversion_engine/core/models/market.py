"""Asset, MarketSnapshot and MarketSet data models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, Optional

from conversion_engine.core.constants import ZERO_ADDRESS
from conversion_engine.core.exceptions import UnknownInterestRateModel
from conversion_engine.core.fixed_point import from_units

if TYPE_CHECKING:
    from conversion_engine.rates.base import InterestRateModel


@dataclass(frozen=True)
class Asset:
    """Token identifier and decimal precision."""

    address: str
    decimals: int
    symbol: str = ""

    @property
    def is_zero(self) -> bool:
        """True for the zero address (an invalid asset)."""
        return not self.address or self.address.lower() == ZERO_ADDRESS

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.address.lower()

    @property
    def name(self) -> str:
        """Human-readable asset name."""
        return self.symbol or self.address


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Point-in-time view of one lending market.

    Pool balances are in the asset's decimals, ratios are 18-decimal
    fractions and the price is in the common 36-decimal quote unit
    per whole token. A snapshot is built from a single read of the
    market and never mutated.
    """

    asset: Asset

    # Pool balances (asset units)
    cash: int
    total_borrows: int
    total_reserves: int

    # Risk parameters (18 decimals)
    collateral_factor: int
    liquidation_threshold: int

    # Price (36 decimals per whole token)
    price: int

    borrow_cap: int = 0  # 0 = unlimited
    reserve_factor: int = 0

    # Market status
    mint_paused: bool = False
    borrow_paused: bool = False
    frozen: bool = False
    borrowing_enabled: bool = True

    interest_rate_model_ref: str = ""

    def __post_init__(self):
        for name in ("cash", "total_borrows", "total_reserves", "borrow_cap", "price"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.liquidation_threshold < self.collateral_factor:
            raise ValueError(
                f"liquidation_threshold {self.liquidation_threshold} is below "
                f"collateral_factor {self.collateral_factor}"
            )

    @property
    def decimals(self) -> int:
        """Decimals of the market asset."""
        return self.asset.decimals

    @property
    def utilization(self) -> int:
        """Pool utilization as an 18-decimal fraction, same formula as the rate models."""
        # Import here to avoid circular imports
        from conversion_engine.rates.base import InterestRateModel

        return InterestRateModel.utilization(self.cash, self.total_borrows, self.total_reserves)

    @property
    def available_liquidity(self) -> int:
        """Liquidity that can be borrowed right now."""
        return self.cash

    @property
    def price_decimal(self) -> Decimal:
        """Price as a human-readable Decimal."""
        return from_units(self.price, 36)


@dataclass(frozen=True)
class MarketSet:
    """
    Registered markets of one lending platform.

    Snapshots are keyed by asset address (case-insensitive), interest
    rate models by the reference stored in each snapshot.
    """

    snapshots: Dict[str, MarketSnapshot] = field(default_factory=dict)
    rate_models: Dict[str, "InterestRateModel"] = field(default_factory=dict)

    @classmethod
    def from_markets(
        cls,
        markets: Iterable[MarketSnapshot],
        rate_models: Optional[Dict[str, "InterestRateModel"]] = None,
    ) -> "MarketSet":
        """Build a market set from snapshots and their rate models."""
        return cls(
            snapshots={m.asset.key: m for m in markets},
            rate_models=dict(rate_models or {}),
        )

    def snapshot(self, asset: str) -> Optional[MarketSnapshot]:
        """Get the snapshot of an asset, None if the asset is not registered."""
        if not asset:
            return None
        return self.snapshots.get(asset.lower())

    def rate_model(self, ref: str) -> "InterestRateModel":
        """
        Get the interest rate model for a reference.

        Raises:
            UnknownInterestRateModel: If no model is registered for ref
        """
        try:
            return self.rate_models[ref]
        except KeyError:
            raise UnknownInterestRateModel(f"Interest rate model not registered: {ref!r}") from None

    def __contains__(self, asset: str) -> bool:
        return self.snapshot(asset) is not None

    def __len__(self) -> int:
        return len(self.snapshots)

