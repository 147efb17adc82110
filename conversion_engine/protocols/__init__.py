"""Lending platform adapters.

Each platform turns its raw market reads into MarketSnapshot and
InterestRateModel objects:
- Compound forks: Keom, Zerovix, Moonwell (conversion_engine.protocols.compound)
- Aave3 (conversion_engine.protocols.aave3)
"""

from .base import ProtocolAdapter, ProtocolType, RawMarket
from .registry import ProtocolAdapterRegistry, register_default_adapters

__all__ = [
    "ProtocolAdapter",
    "ProtocolType",
    "RawMarket",
    "ProtocolAdapterRegistry",
    "register_default_adapters",
]
