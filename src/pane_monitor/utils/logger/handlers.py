"""
Log handlers for Pane Monitor.

Rotating human-readable and JSON log files, plus an optional stderr handler.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LogConfig, ensure_log_directory, get_config
from .formatters import HumanFormatter, JsonFormatter


def _rotating_handler(
    path: Path, config: LogConfig, formatter: logging.Formatter
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)  # Files get everything the logger lets through
    handler.setFormatter(formatter)
    return handler


def create_file_handler(config: LogConfig) -> RotatingFileHandler:
    """Rotating handler for the human-readable log"""
    ensure_log_directory(config)
    return _rotating_handler(config.human_log_path, config, HumanFormatter())


def create_json_handler(config: LogConfig) -> RotatingFileHandler:
    """Rotating handler for the JSON Lines log"""
    ensure_log_directory(config)
    return _rotating_handler(config.json_log_path, config, JsonFormatter())


def create_console_handler(config: LogConfig) -> logging.StreamHandler:
    """stderr handler: warnings and above unless in debug mode"""
    handler = logging.StreamHandler(sys.stderr)
    if config.default_level == logging.DEBUG:
        handler.setLevel(logging.DEBUG)
    else:
        handler.setLevel(logging.WARNING)
    handler.setFormatter(HumanFormatter())
    return handler


def setup_handlers(
    logger: logging.Logger,
    config: Optional[LogConfig] = None,
    include_console: Optional[bool] = None,
) -> None:
    """Replace the handlers of `logger` according to `config`.

    If the log directory cannot be created, logs go to the console instead.
    """
    if config is None:
        config = get_config()

    console_enabled = (
        include_console if include_console is not None else config.console_enabled
    )

    logger.handlers.clear()

    try:
        logger.addHandler(create_file_handler(config))
        logger.addHandler(create_json_handler(config))
    except OSError as e:
        console_enabled = True
        sys.stderr.write(f"pane-monitor: file logging disabled ({e})\n")

    if console_enabled:
        logger.addHandler(create_console_handler(config))

    logger.setLevel(config.default_level)
