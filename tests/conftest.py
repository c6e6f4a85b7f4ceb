"""
Pytest configuration and shared fixtures for pane_monitor tests.

This module provides:
- src/ on sys.path and an isolated log directory
- A controllable monotonic clock
- The observation factory as a fixture
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Keep test runs out of the user's log directory
os.environ.setdefault(
    "PANE_MONITOR_LOG_DIR", tempfile.mkdtemp(prefix="pane-monitor-logs-")
)

from tests.factories import FakeClock, make_observation  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def observation_factory():
    """Factory fixture building PaneObservations with sensible defaults"""
    return make_observation
