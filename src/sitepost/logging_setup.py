"""Logging for the sitepost command line.

Records from ``sitepost.*`` loggers go to stderr through a Rich handler, so
command output on stdout stays clean. ``--verbose`` (or
``SITEPOST_LOG_LEVEL=DEBUG``) also shows every file a scan skipped and why.
"""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "console", "resolve_level"]

LOG_LEVEL_ENV: Final[str] = "SITEPOST_LOG_LEVEL"
PACKAGE_LOGGER: Final[str] = "sitepost"

console = Console(stderr=True)


def resolve_level(*, verbose: bool = False) -> int:
    """Return DEBUG when verbose, else the level named by ``SITEPOST_LOG_LEVEL`` (default INFO)."""
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach the Rich handler to the ``sitepost`` logger once and set its level."""
    logger = logging.getLogger(PACKAGE_LOGGER)

    handler = next((h for h in logger.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    logger.setLevel(resolve_level(verbose=verbose))
    return logger
