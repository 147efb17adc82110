"""Compound-fork platform configuration and constants."""

from conversion_engine.core.constants import SECONDS_PER_YEAR
from conversion_engine.protocols.base import ProtocolType

# Keom, Zerovix and Moonwell accrue interest per timestamp
TIMESTAMPS_PER_YEAR = SECONDS_PER_YEAR

# Oracle prices are scaled to 36 - underlying decimals
ORACLE_PRICE_DECIMALS = 36

PROTOCOL_NAMES = {
    ProtocolType.KEOM: "Keom",
    ProtocolType.ZEROVIX: "Zerovix",
    ProtocolType.MOONWELL: "Moonwell",
}

COMPOUND_FORKS = tuple(PROTOCOL_NAMES)
