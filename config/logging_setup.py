"""Logging configuration for the conversion engine."""

import logging
from typing import Optional

from .settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Unknown level names fall back to INFO.

    Args:
        level: Logging level name (e.g. "DEBUG"), settings log_level if omitted
    """
    if level is None:
        level = get_settings().log_level

    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)
