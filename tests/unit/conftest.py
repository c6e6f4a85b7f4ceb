"""
Unit test fixtures for pure functions and isolated components.
"""

import pytest
from faker import Faker

fake = Faker()


@pytest.fixture
def sample_session_name() -> str:
    """A tmux-style session name."""
    return fake.word()


@pytest.fixture
def sample_project_path(tmp_path) -> str:
    """A project working directory (not created on disk)."""
    return str(tmp_path / fake.word() / "project_dir")
