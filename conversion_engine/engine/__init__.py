"""Plan building and rebalancing engine."""

from .capacity import CapacityLimiter, CapacityLimits
from .entry_kinds import EntryKindResolver, ResolvedAmounts
from .apr import AprPredictor, AprPrediction, plan_apr18
from .planner import ConversionPlanBuilder
from .rebalance import RebalanceEngine
from .selector import PlanSelector, RankedPlan
from .service import ConversionEngine

__all__ = [
    "CapacityLimiter",
    "CapacityLimits",
    "EntryKindResolver",
    "ResolvedAmounts",
    "AprPredictor",
    "AprPrediction",
    "plan_apr18",
    "ConversionPlanBuilder",
    "RebalanceEngine",
    "PlanSelector",
    "RankedPlan",
    "ConversionEngine",
]
