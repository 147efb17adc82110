"""Base protocol adapter interface.

Defines the interface that turns a lending platform's raw market reads
into MarketSnapshot and InterestRateModel objects, so the engine is
written once against these two types and never against a platform.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from conversion_engine.core.models import MarketSet, MarketSnapshot
from conversion_engine.rates.base import InterestRateModel

logger = logging.getLogger(__name__)

RawMarket = Dict[str, Any]


class ProtocolType(Enum):
    """Supported lending platforms."""

    KEOM = "keom"
    ZEROVIX = "zerovix"
    MOONWELL = "moonwell"
    AAVE3 = "aave3"


class ProtocolAdapter(ABC):
    """Abstract base class for platform-specific market adapters.

    Raw market data is a dict with the platform's own field names, as
    returned by its contracts or data providers.
    """

    @property
    @abstractmethod
    def protocol_type(self) -> ProtocolType:
        """Return the protocol type for this adapter."""
        ...

    @property
    @abstractmethod
    def protocol_name(self) -> str:
        """Return a human-readable protocol name."""
        ...

    @abstractmethod
    def snapshot(self, raw: RawMarket) -> Optional[MarketSnapshot]:
        """Convert a raw market read into a snapshot.

        Args:
            raw: Raw market data

        Returns:
            MarketSnapshot, or None if the market is not usable by this platform
        """
        ...

    @abstractmethod
    def interest_rate_model(self, raw: RawMarket) -> InterestRateModel:
        """Build the interest rate model referenced by a raw market read."""
        ...

    @staticmethod
    def require(raw: RawMarket, key: str) -> Any:
        """Get a required field of a raw market read.

        Raises:
            ValueError: If the field is missing
        """
        if key not in raw or raw[key] is None:
            raise ValueError(f"Missing field in market data: {key}")
        return raw[key]

    def market_set(self, raws: Iterable[RawMarket]) -> MarketSet:
        """Build the market set of the platform.

        Markets the adapter rejects are left out of the set, so requests
        involving them produce the null plan.

        Args:
            raws: Raw market reads

        Returns:
            MarketSet with the snapshots and their interest rate models
        """
        snapshots = []
        rate_models: Dict[str, InterestRateModel] = {}
        for raw in raws:
            snapshot = self.snapshot(raw)
            if snapshot is None:
                continue
            snapshots.append(snapshot)
            if snapshot.interest_rate_model_ref not in rate_models:
                rate_models[snapshot.interest_rate_model_ref] = self.interest_rate_model(raw)

        logger.info(f"Loaded {len(snapshots)} markets for {self.protocol_name}")
        return MarketSet.from_markets(snapshots, rate_models)
