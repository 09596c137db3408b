"""Logging setup shared by the CLI commands."""

import logging
import os
import sys

LOG_LEVEL_ENV = "STDGUARD_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configure root logging to stderr.

    Args:
        level: Explicit level name; falls back to STDGUARD_LOG_LEVEL, then WARNING
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stderr, force=True)
