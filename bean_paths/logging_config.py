"""Logging setup shared by all bean_paths modules.

Modules obtain loggers with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich handler to the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "bean_paths"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger placed under the package logger hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """Configure the package logger with a rich console handler.

    Calling this more than once only updates the level.

    Args:
        level: Log level name used when ``verbose`` is False.
        verbose: Shortcut for DEBUG level.

    Returns:
        The configured package logger.
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level.upper())

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        _configured = True

    return logger
