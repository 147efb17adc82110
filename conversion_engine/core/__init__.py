"""Core module - models, constants, fixed-point math and errors."""

from .models import (
    Asset,
    MarketSnapshot,
    MarketSet,
    EntryKind,
    EntryParams,
    ConversionRequest,
    ConversionPlan,
    Position,
    RebalanceDirection,
    RebalancePlan,
    HealthStatus,
)
from .constants import WAD, RAY, MAX_UINT256, PRICE_DECIMALS, ZERO_ADDRESS
from .exceptions import (
    ConversionEngineError,
    InvalidRequest,
    HealthFactorViolation,
    UnknownInterestRateModel,
    FixedPointOverflow,
)

__all__ = [
    "Asset",
    "MarketSnapshot",
    "MarketSet",
    "EntryKind",
    "EntryParams",
    "ConversionRequest",
    "ConversionPlan",
    "Position",
    "RebalanceDirection",
    "RebalancePlan",
    "HealthStatus",
    "WAD",
    "RAY",
    "MAX_UINT256",
    "PRICE_DECIMALS",
    "ZERO_ADDRESS",
    "ConversionEngineError",
    "InvalidRequest",
    "HealthFactorViolation",
    "UnknownInterestRateModel",
    "FixedPointOverflow",
]
