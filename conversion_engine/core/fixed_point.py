"""
Integer fixed-point arithmetic for cross-asset amounts.

Amounts are carried as integer mantissas with an implied decimal exponent:
- token amounts use the token's own decimals (6, 8, 18, ...)
- collateral factors, health factors and rates use 18 decimals (WAD)
- prices use 36 decimals per whole token

Intermediate products are exact (Python integers are unbounded, which
covers the 512-bit intermediates of the on-chain mulDiv), so operands may
themselves be products. Results are checked against the uint256 range so a
value that could not exist on-chain is never produced silently.
"""

from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Union

from .constants import MAX_UINT256, WAD
from .exceptions import FixedPointOverflow


def _check_operand(value: int, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < 0:
        raise FixedPointOverflow(f"{name} is negative: {value}")


def _check_result(value: int) -> int:
    if value > MAX_UINT256:
        raise FixedPointOverflow(f"result exceeds uint256: {value}")
    return value


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    Calculate floor(a * b / denominator) with full intermediate precision.

    Raises:
        ZeroDivisionError: If denominator is zero
        FixedPointOverflow: If an operand is negative or the result exceeds uint256
    """
    _check_operand(a, "a")
    _check_operand(b, "b")
    _check_operand(denominator, "denominator")
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    return _check_result(a * b // denominator)


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """Calculate ceil(a * b / denominator) with full intermediate precision."""
    _check_operand(a, "a")
    _check_operand(b, "b")
    _check_operand(denominator, "denominator")
    if denominator == 0:
        raise ZeroDivisionError("mul_div_up denominator is zero")
    return _check_result(-(-(a * b) // denominator))


def scale_decimals(value: int, from_decimals: int, to_decimals: int) -> int:
    """
    Rescale a value between decimal precisions.

    Scaling down truncates toward zero.
    """
    _check_operand(value, "value")
    if from_decimals == to_decimals:
        return value
    if to_decimals > from_decimals:
        return _check_result(value * 10 ** (to_decimals - from_decimals))
    return value // 10 ** (from_decimals - to_decimals)


def convert_units(
    amount: int,
    source_price: int,
    source_decimals: int,
    dest_price: int,
    dest_decimals: int,
) -> int:
    """
    Revalue an amount of one asset into another asset through prices.

    result = amount * 10^dest_decimals * source_price / (dest_price * 10^source_decimals)

    Args:
        amount: Amount of the source asset in its decimals
        source_price: Price of the source asset (common quote unit)
        source_decimals: Decimals of the source amount
        dest_price: Price of the destination asset (same quote unit)
        dest_decimals: Decimals of the result

    Returns:
        Value of amount in destination asset units
    """
    return mul_div(
        amount * source_price,
        10**dest_decimals,
        dest_price * 10**source_decimals,
    )


def to_units(value: Union[Decimal, int, str], decimals: int) -> int:
    """Convert a human-readable amount to integer units (truncating)."""
    amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
    with localcontext() as ctx:
        ctx.prec = 96
        scaled = (amount * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


def from_units(value: int, decimals: int) -> Decimal:
    """Convert integer units to a human-readable Decimal."""
    with localcontext() as ctx:
        ctx.prec = 96
        return Decimal(value) / (Decimal(10) ** decimals)


def wad(value: Union[Decimal, int, str]) -> int:
    """Shortcut for an 18-decimal fraction, e.g. wad("0.85")."""
    return to_units(value, 18)


def wad_mul(a: int, b: int) -> int:
    """Multiply two 18-decimal fractions (floor)."""
    return mul_div(a, b, WAD)


def wad_div(a: int, b: int) -> int:
    """Divide two 18-decimal fractions (floor)."""
    return mul_div(a, WAD, b)
