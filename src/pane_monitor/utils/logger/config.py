"""
Logging configuration for Pane Monitor.

Reads the logging settings from environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Environment variable names
DEBUG_ENV = "PANE_MONITOR_DEBUG"
LOG_LEVEL_ENV = "PANE_MONITOR_LOG_LEVEL"
LOG_CONSOLE_ENV = "PANE_MONITOR_LOG_CONSOLE"
LOG_DIR_ENV = "PANE_MONITOR_LOG_DIR"

# XDG state directory
LOG_DIR = Path.home() / ".local/state/pane-monitor/logs"

HUMAN_LOG_FILE = "pane-monitor.log"
JSON_LOG_FILE = "pane-monitor.json"

LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


@dataclass
class LogConfig:
    """Configuration for the logging system.

    Attributes:
        log_dir: Directory where log files are stored
        max_bytes: Size of a log file before rotation
        backup_count: Rotated files kept per log
        default_level: Logger level
        console_enabled: Also log to stderr
    """

    log_dir: Path = field(default_factory=lambda: LOG_DIR)
    max_bytes: int = 5 * 1024 * 1024  # 5MB
    backup_count: int = 3
    default_level: int = logging.INFO
    console_enabled: bool = False

    @property
    def human_log_path(self) -> Path:
        return self.log_dir / HUMAN_LOG_FILE

    @property
    def json_log_path(self) -> Path:
        return self.log_dir / JSON_LOG_FILE


def get_config() -> LogConfig:
    """Create a LogConfig from environment variables.

    Environment variables:
        PANE_MONITOR_DEBUG: '1', 'true' or 'yes' enables debug level and console
        PANE_MONITOR_LOG_LEVEL: 'debug', 'info', 'warning', 'error', 'critical'
        PANE_MONITOR_LOG_CONSOLE: force console output on or off
        PANE_MONITOR_LOG_DIR: log directory
    """
    config = LogConfig()

    if os.environ.get(DEBUG_ENV, "").lower() in _TRUTHY:
        config.default_level = logging.DEBUG
        config.console_enabled = True

    log_level_str = os.environ.get(LOG_LEVEL_ENV, "").lower()
    if log_level_str in LOG_LEVEL_MAP:
        config.default_level = LOG_LEVEL_MAP[log_level_str]

    console_env = os.environ.get(LOG_CONSOLE_ENV, "").lower()
    if console_env in _TRUTHY:
        config.console_enabled = True
    elif console_env in _FALSY:
        config.console_enabled = False

    log_dir = os.environ.get(LOG_DIR_ENV)
    if log_dir:
        config.log_dir = Path(os.path.expanduser(log_dir))

    return config


def ensure_log_directory(config: Optional[LogConfig] = None) -> Path:
    """Create the log directory if needed and return it"""
    log_dir = config.log_dir if config else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
