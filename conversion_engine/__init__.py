"""Conversion plans and health factor rebalancing for lending platforms."""

from conversion_engine.core import (
    Asset,
    ConversionPlan,
    ConversionRequest,
    EntryKind,
    EntryParams,
    MarketSet,
    MarketSnapshot,
    Position,
    RebalanceDirection,
    RebalancePlan,
    HealthStatus,
    ConversionEngineError,
    InvalidRequest,
    HealthFactorViolation,
    UnknownInterestRateModel,
    FixedPointOverflow,
)
from conversion_engine.engine import (
    ConversionEngine,
    ConversionPlanBuilder,
    PlanSelector,
    RankedPlan,
    RebalanceEngine,
)

__version__ = "0.1.0"

__all__ = [
    "Asset",
    "ConversionPlan",
    "ConversionRequest",
    "EntryKind",
    "EntryParams",
    "MarketSet",
    "MarketSnapshot",
    "Position",
    "RebalanceDirection",
    "RebalancePlan",
    "HealthStatus",
    "ConversionEngineError",
    "InvalidRequest",
    "HealthFactorViolation",
    "UnknownInterestRateModel",
    "FixedPointOverflow",
    "ConversionEngine",
    "ConversionPlanBuilder",
    "PlanSelector",
    "RankedPlan",
    "RebalanceEngine",
]
