"""Logging configuration for the application."""
from __future__ import annotations

import logging
import os
import sys


def setup_logging() -> None:
    """Configure application-wide logging.

    Level comes from LOG_LEVEL (default INFO). Output goes to stdout.
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
