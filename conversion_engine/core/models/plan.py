"""Conversion request and conversion plan models."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence

from conversion_engine.core.exceptions import InvalidRequest


class EntryKind(IntEnum):
    """Strategies converting a single input amount into (collateral, borrow)."""

    EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT = 0
    EXACT_PROPORTIONS = 1
    EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN = 2


@dataclass(frozen=True)
class EntryParams:
    """
    Entry kind and its parameters.

    For EXACT_PROPORTIONS the input amount is split so that the value of
    the collateral retained and the value borrowed stand in ratio x:y.
    """

    kind: EntryKind = EntryKind.EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT
    x: int = 1
    y: int = 1

    def __post_init__(self):
        if not isinstance(self.kind, EntryKind):
            try:
                object.__setattr__(self, "kind", EntryKind(int(self.kind)))
            except ValueError:
                raise InvalidRequest(f"Unknown entry kind: {self.kind}") from None

    @classmethod
    def decode(cls, data: Sequence[int]) -> "EntryParams":
        """
        Decode entry data given as a sequence of integers.

        Empty data means EXACT_COLLATERAL_IN_FOR_MAX_BORROW_OUT. The first
        item is the kind; EXACT_PROPORTIONS is followed by x and y.

        Raises:
            InvalidRequest: If the kind is unknown or proportions are missing
        """
        if not data:
            return cls()
        try:
            kind = EntryKind(int(data[0]))
        except ValueError:
            raise InvalidRequest(f"Unknown entry kind: {data[0]}") from None

        if kind == EntryKind.EXACT_PROPORTIONS:
            if len(data) < 3:
                raise InvalidRequest("EXACT_PROPORTIONS requires x and y")
            return cls(kind=kind, x=int(data[1]), y=int(data[2]))
        return cls(kind=kind)

    def encode(self) -> tuple:
        """Encode to the sequence form accepted by decode()."""
        if self.kind == EntryKind.EXACT_PROPORTIONS:
            return (int(self.kind), self.x, self.y)
        return (int(self.kind),)


@dataclass(frozen=True)
class ConversionRequest:
    """
    Request for a conversion plan.

    amount_in is in borrow asset units for EXACT_BORROW_OUT_FOR_MIN_COLLATERAL_IN
    and in collateral asset units otherwise. health_factor_target is an
    18-decimal fraction.
    """

    collateral_asset: str
    borrow_asset: str
    amount_in: int
    health_factor_target: int
    periods: int
    entry: EntryParams = field(default_factory=EntryParams)


@dataclass(frozen=True)
class ConversionPlan:
    """
    Result of building a conversion plan.

    Amounts are in their asset units, ltv and liquidation_threshold
    are 18-decimal fractions, the *36 figures are borrow asset units
    scaled to 36 decimals.
    """

    converter: Optional[str]
    collateral_amount: int
    amount_to_borrow: int
    max_amount_to_borrow: int
    max_amount_to_supply: int
    ltv: int
    liquidation_threshold: int
    borrow_cost36: int
    supply_income36: int
    collateral_value_in_borrow_asset36: int

    @classmethod
    def null(cls) -> "ConversionPlan":
        """The "no plan available" sentinel."""
        return cls(
            converter=None,
            collateral_amount=0,
            amount_to_borrow=0,
            max_amount_to_borrow=0,
            max_amount_to_supply=0,
            ltv=0,
            liquidation_threshold=0,
            borrow_cost36=0,
            supply_income36=0,
            collateral_value_in_borrow_asset36=0,
        )

    @property
    def is_null(self) -> bool:
        """True for the sentinel plan."""
        return self.converter is None

    @property
    def net_cost36(self) -> int:
        """Borrow cost minus supply income (may be negative)."""
        return self.borrow_cost36 - self.supply_income36

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "converter": self.converter,
            "collateral_amount": str(self.collateral_amount),
            "amount_to_borrow": str(self.amount_to_borrow),
            "max_amount_to_borrow": str(self.max_amount_to_borrow),
            "max_amount_to_supply": str(self.max_amount_to_supply),
            "ltv": str(self.ltv),
            "liquidation_threshold": str(self.liquidation_threshold),
            "borrow_cost36": str(self.borrow_cost36),
            "supply_income36": str(self.supply_income36),
            "collateral_value_in_borrow_asset36": str(self.collateral_value_in_borrow_asset36),
        }
