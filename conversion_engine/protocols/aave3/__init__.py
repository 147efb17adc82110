"""Aave3 platform."""

from conversion_engine.protocols.aave3.adapter import Aave3Adapter

__all__ = [
    "Aave3Adapter",
]
