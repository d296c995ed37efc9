"""Logging setup shared by the CLI, the HTTP server and the code generators.

Library modules only ask for a logger; handlers are installed by the
front ends through :func:`configure_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "autotyper"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the ``autotyper`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The namespaced logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "warning") -> logging.Logger:
    """Send package log records to stderr through rich.

    Calling this more than once replaces the previous rich handler instead
    of stacking a new one.

    Args:
        level: Logging level name (debug, info, warning, error, critical).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)

    return logger
