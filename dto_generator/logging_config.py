"""Logging setup shared by the whole package.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich console handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "dto_generator"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int = logging.WARNING, console: Console | None = None) -> None:
    """Attach a RichHandler to the package logger.

    Args:
        level: Minimum level to emit.
        console: Console to log to (defaults to stderr).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Clear existing handlers to prevent duplicate logs
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=level <= logging.DEBUG,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
