"""Configuration module for the conversion engine."""

from .settings import EngineSettings, get_settings
from .logging_setup import configure_logging

__all__ = ["EngineSettings", "get_settings", "configure_logging"]
