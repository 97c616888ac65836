"""Centralized logging for fdenum.

Every module obtains its logger through ``get_logger(__name__)`` so that all
output hangs off the single ``"fdenum"`` package logger. That logger gets one
stdout handler the first time it is touched. The initial level comes from the
``FDENUM_LOG_LEVEL`` environment variable when set (e.g. ``DEBUG``), else INFO.
"""

import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "fdenum"
LOG_LEVEL_ENV = "FDENUM_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant.

    Unknown or empty names resolve to ``default``.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single handler to the package logger.

    Subsequent calls are no-ops until ``reset_logging`` is called.

    Args:
        level: Logging level; defaults to ``FDENUM_LOG_LEVEL`` or INFO.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    if level is None:
        level = level_from_name(os.environ.get(LOG_LEVEL_ENV))

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger that inherits the package configuration.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger with level NOTSET so the package level applies.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Switch the whole package to DEBUG."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Switch the whole package back to INFO."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop handlers and forget configuration (used by tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
