"""
Logging for Pane Monitor.

Simple API:
    from pane_monitor.utils.logger import debug, info, warn, error

    info("Monitor started")

Component loggers:
    from pane_monitor.utils.logger import get_logger

    logger = get_logger("tracker")  # logs as "pane_monitor.tracker"
"""

import logging
from typing import Any, Optional

from .config import LogConfig, get_config, ensure_log_directory
from .handlers import setup_handlers

ROOT_LOGGER_NAME = "pane_monitor"

_initialized = False
_root_logger: Optional[logging.Logger] = None


def setup_logging(config: Optional[LogConfig] = None) -> logging.Logger:
    """Initialize the logging system. Call once at startup.

    Args:
        config: Optional LogConfig. If not provided, reads from environment.

    Returns:
        The configured root logger.
    """
    global _initialized, _root_logger

    if config is None:
        config = get_config()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    setup_handlers(logger, config)
    logger.propagate = False

    _initialized = True
    _root_logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the root logger, or a child logger for a component.

    Initializes logging on first use.
    """
    if not _initialized:
        setup_logging()

    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return _root_logger or logging.getLogger(ROOT_LOGGER_NAME)


def debug(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().debug(msg, *args, **kwargs)


def info(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().info(msg, *args, **kwargs)


def warn(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().warning(msg, *args, **kwargs)


def error(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().error(msg, *args, **kwargs)


def exception(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an error with the current exception's traceback"""
    get_logger().exception(msg, *args, **kwargs)


__all__ = [
    "debug",
    "info",
    "warn",
    "error",
    "exception",
    "setup_logging",
    "get_logger",
    "LogConfig",
    "get_config",
    "ensure_log_directory",
    "ROOT_LOGGER_NAME",
]
