"""Compound-fork platforms: Keom, Zerovix, Moonwell."""

from conversion_engine.protocols.compound.adapter import CompoundForkAdapter
from conversion_engine.protocols.compound.config import COMPOUND_FORKS, TIMESTAMPS_PER_YEAR

__all__ = [
    "CompoundForkAdapter",
    "COMPOUND_FORKS",
    "TIMESTAMPS_PER_YEAR",
]
