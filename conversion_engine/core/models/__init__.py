"""Core data models for the conversion engine."""

from .market import Asset, MarketSnapshot, MarketSet
from .plan import EntryKind, EntryParams, ConversionRequest, ConversionPlan
from .position import Position, RebalanceDirection, RebalancePlan, HealthStatus

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
]
