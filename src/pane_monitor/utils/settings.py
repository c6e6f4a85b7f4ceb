"""
Settings management for Pane Monitor
"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

CONFIG_DIR = os.path.expanduser("~/.config/pane-monitor")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")


@dataclass
class Settings:
    """Application settings"""

    # Seconds between pane polls
    poll_interval: int = 2

    # Show panes with no detected agent
    show_all_panes: bool = False

    # One line per pane instead of the detailed layout
    compact_mode: bool = False

    # Hand transition events to the notifier
    notify: bool = True

    # Cost strategy: "flat" (one table) or "model" (per-model table)
    pricing: str = "flat"

    # Environment variable holding the monitor's own pane id
    self_pane_env: str = "TMUX_PANE"

    # Session log roots (empty = provider default)
    claude_projects_dir: str = ""
    gemini_tmp_dir: str = ""

    def save(self):
        """Save settings to config file"""
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from config file, or return defaults"""
        if not os.path.exists(CONFIG_FILE):
            return cls()

        try:
            with open(CONFIG_FILE, "r") as f:
                data = json.load(f)

            # Ignore keys from older versions
            valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
            filtered_data = {k: v for k, v in data.items() if k in valid_fields}

            return cls(**filtered_data)
        except Exception:
            return cls()

    def self_pane_id(self) -> Optional[str]:
        """Id of the pane the monitor runs in, if any"""
        return os.environ.get(self.self_pane_env) or None

    def log_root_overrides(self) -> dict[str, Path]:
        """Configured log roots keyed by provider tag"""
        roots = {}
        if self.claude_projects_dir:
            roots["claude"] = Path(os.path.expanduser(self.claude_projects_dir))
        if self.gemini_tmp_dir:
            roots["gemini"] = Path(os.path.expanduser(self.gemini_tmp_dir))
        return roots


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def save_settings():
    """Save the global settings"""
    if _settings is not None:
        _settings.save()
