"""Interest rate models.

Base interface: conversion_engine.rates.base
Compound forks: conversion_engine.rates.jump_rate
Aave3: conversion_engine.rates.aave_strategy
"""

from .base import InterestRateModel
from .jump_rate import JumpRateModel
from .aave_strategy import DefaultReserveRateStrategy

__all__ = [
    "InterestRateModel",
    "JumpRateModel",
    "DefaultReserveRateStrategy",
]
