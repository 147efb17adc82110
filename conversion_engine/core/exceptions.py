"""Exceptions raised by the conversion engine."""

from typing import Optional


class ConversionEngineError(Exception):
    """Base class for conversion engine failures."""


class InvalidRequest(ConversionEngineError, ValueError):
    """Raised when a plan or rebalance request is malformed."""


class HealthFactorViolation(ConversionEngineError):
    """Raised when an action would degrade a healthy position beyond tolerance."""

    def __init__(self, before: int, after: int, message: Optional[str] = None):
        self.before = before
        self.after = after
        super().__init__(message or f"wrong health factor: {before} -> {after}")


class UnknownInterestRateModel(ConversionEngineError, KeyError):
    """Raised when a market references an interest rate model that is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown interest rate model"


class FixedPointOverflow(ConversionEngineError, OverflowError):
    """Raised when a fixed-point result does not fit into 256 bits."""
