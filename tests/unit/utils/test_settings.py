"""
Tests for settings management module.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from pane_monitor.utils import settings
from pane_monitor.utils.settings import Settings, get_settings, save_settings


@pytest.fixture
def config_paths(tmp_path):
    """Point CONFIG_DIR/CONFIG_FILE at a temporary directory"""
    config_dir = tmp_path / "config"
    config_file = config_dir / "settings.json"
    with (
        patch.object(settings, "CONFIG_DIR", str(config_dir)),
        patch.object(settings, "CONFIG_FILE", str(config_file)),
    ):
        yield config_dir, config_file


@pytest.fixture
def reset_global():
    with patch.object(settings, "_settings", None):
        yield


class TestSettingsDataclass:
    def test_defaults(self):
        s = Settings()

        assert s.poll_interval == 2
        assert s.show_all_panes is False
        assert s.compact_mode is False
        assert s.notify is True
        assert s.pricing == "flat"
        assert s.self_pane_env == "TMUX_PANE"
        assert s.claude_projects_dir == ""
        assert s.gemini_tmp_dir == ""

    @pytest.mark.parametrize(
        "init_kwargs",
        [
            pytest.param({"poll_interval": 5}, id="poll_interval"),
            pytest.param({"pricing": "model"}, id="pricing"),
            pytest.param({"notify": False, "compact_mode": True}, id="flags"),
        ],
    )
    def test_custom_values_keep_other_defaults(self, init_kwargs):
        s = Settings(**init_kwargs)

        for key, value in init_kwargs.items():
            assert getattr(s, key) == value
        assert s.self_pane_env == "TMUX_PANE"


class TestSelfPaneId:
    def test_reads_configured_variable(self, monkeypatch):
        monkeypatch.setenv("MY_PANE", "%12")

        assert Settings(self_pane_env="MY_PANE").self_pane_id() == "%12"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_or_empty_is_none(self, monkeypatch, value):
        if value is None:
            monkeypatch.delenv("TMUX_PANE", raising=False)
        else:
            monkeypatch.setenv("TMUX_PANE", value)

        assert Settings().self_pane_id() is None


class TestLogRootOverrides:
    def test_empty_by_default(self):
        assert Settings().log_root_overrides() == {}

    def test_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        s = Settings(claude_projects_dir="~/claude", gemini_tmp_dir="/var/gemini")

        roots = s.log_root_overrides()

        assert roots["claude"] == tmp_path / "claude"
        assert roots["gemini"] == Path("/var/gemini")


class TestSaveAndLoad:
    def test_save_creates_directory_and_file(self, config_paths):
        config_dir, config_file = config_paths

        Settings(poll_interval=7, pricing="model").save()

        assert config_dir.is_dir()
        data = json.loads(config_file.read_text())
        assert data["poll_interval"] == 7
        assert data["pricing"] == "model"

    def test_round_trip(self, config_paths):
        original = Settings(show_all_panes=True, gemini_tmp_dir="/g")
        original.save()

        assert Settings.load() == original

    def test_missing_file_returns_defaults(self, config_paths):
        assert Settings.load() == Settings()

    @pytest.mark.parametrize(
        "content",
        [
            pytest.param("{not json", id="invalid_json"),
            pytest.param('{"poll_interval": 1', id="truncated"),
        ],
    )
    def test_corrupt_file_returns_defaults(self, config_paths, content):
        config_dir, config_file = config_paths
        config_dir.mkdir(parents=True)
        config_file.write_text(content)

        assert Settings.load() == Settings()

    def test_unknown_keys_ignored(self, config_paths):
        config_dir, config_file = config_paths
        config_dir.mkdir(parents=True)
        config_file.write_text(json.dumps({"poll_interval": 9, "legacy_option": 1}))

        loaded = Settings.load()

        assert loaded.poll_interval == 9
        assert not hasattr(loaded, "legacy_option")


class TestGlobalSettings:
    def test_get_settings_is_cached(self, config_paths, reset_global):
        first = get_settings()

        assert get_settings() is first

    def test_save_settings_writes_global(self, config_paths, reset_global):
        _, config_file = config_paths
        get_settings().poll_interval = 11

        save_settings()

        assert json.loads(config_file.read_text())["poll_interval"] == 11

    def test_save_settings_noop_without_global(self, config_paths, reset_global):
        _, config_file = config_paths

        save_settings()

        assert not config_file.exists()
