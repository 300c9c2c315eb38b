"""Logging for augflow.

Every module logs through a child of the ``augflow`` logger. The solver
reports each augmenting round at DEBUG; the command-line driver reports
progress at INFO and failures at ERROR. The ``augflow`` command picks the
level from its ``-v``/``--quiet`` flags via :func:`level_from_flags`.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "augflow"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler owned by the "augflow" logger; None until first configured
_handler: Optional[logging.Handler] = None


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach the package handler to the ``augflow`` logger.

    Only the first call configures anything; later calls return the logger
    unchanged until :func:`reset_logging`.

    Args:
        level: Initial level for the package (default: INFO).
        format_string: Record format, ``DEFAULT_FORMAT`` if omitted.
        handler: Destination for records, a stdout stream handler if omitted.

    Returns:
        The ``augflow`` logger.
    """
    global _handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        return root_logger

    _handler = handler if handler is not None else logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.handlers[:] = [_handler]
    root_logger.setLevel(level)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (usually ``__name__``), with the package handler in place."""
    setup_root_logger()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Apply ``level`` to the ``augflow`` logger and its handler.

    Child loggers carry no level of their own, so they follow immediately.
    """
    root_logger = setup_root_logger()
    root_logger.setLevel(level)
    _handler.setLevel(level)


def level_from_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Log level selected by the command-line flags; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def reset_logging() -> None:
    """Detach the package handler so the next call reconfigures (used by tests)."""
    global _handler
    _handler = None

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
