"""Logging setup shared by the API and the CLI."""

import logging
import sys
from functools import lru_cache

from psowatch_config.settings import get_settings


@lru_cache(maxsize=1)
def configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the psowatch application with:
    - Console output with timestamps and module names
    - Configurable log level for psowatch modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("psowatch").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
