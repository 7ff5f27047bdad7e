"""Logging setup for VersionGnome.

Every module logs through ``logging.getLogger(__name__)``. setup_logger()
attaches a single Rich handler (writing to stderr) to the ``versiongnome``
package logger so those records reach the terminal. Debug output is enabled
by ``--debug`` on the CLI or the VERSIONGNOME_DEBUG environment variable.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "versiongnome"


def debug_enabled() -> bool:
    """Check the VERSIONGNOME_DEBUG environment variable."""
    return os.getenv("VERSIONGNOME_DEBUG", "0") == "1"


def setup_logger(verbose: Optional[bool] = None) -> logging.Logger:
    """Configure the package logger.

    Calling it again only adjusts the level; the handler is added once.

    Args:
        verbose: Log at DEBUG level. ``None`` defers to VERSIONGNOME_DEBUG.

    Returns:
        The ``versiongnome`` logger.
    """
    if verbose is None:
        verbose = debug_enabled()

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            log_time_format="[%H:%M:%S]",
        )
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def debug(msg: str) -> None:
    """Log a debug message on the package logger."""
    logging.getLogger(PACKAGE_LOGGER).debug(msg)
