"""Tests for gyst.config module."""

import pytest
import yaml

from gyst import global_config
from gyst.config import (
    DEFAULT_MAX_DIFF_SIZE,
    DEFAULT_MODEL,
    DEFAULT_RELAY_URL,
    BackendConfig,
    BackendMode,
    load_config,
)
from gyst.global_config import GlobalConfigError


def _write_config(data):
    global_config.ensure_global_config_dir()
    global_config.get_config_file_path().write_text(yaml.dump(data))


class TestBackendConfig:
    """Tests for BackendConfig."""

    def test_defaults(self):
        config = BackendConfig()
        assert config.mode == BackendMode.RELAY
        assert config.model == DEFAULT_MODEL
        assert config.max_diff_size == DEFAULT_MAX_DIFF_SIZE
        assert config.max_subject_length == 72
        assert config.rename_threshold == 50
        assert config.api_key is None

    def test_blank_key_is_missing(self):
        assert BackendConfig(api_key="   ").api_key is None

    def test_relay_url_trailing_slash(self):
        assert BackendConfig(relay_url="https://relay.example.com/").relay_url == "https://relay.example.com"

    def test_masked_api_key(self):
        assert BackendConfig(api_key="sk-ant-1234567890abcd").masked_api_key() == "sk-ant-1...abcd"
        assert BackendConfig(api_key="short").masked_api_key() == "********"
        assert BackendConfig().masked_api_key() == "<not set>"

    def test_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            BackendConfig(max_diff_size=0)
        with pytest.raises(ValueError):
            BackendConfig(rename_threshold=150)


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_files(self):
        config = load_config()
        assert config.mode == BackendMode.RELAY
        assert config.relay_url == DEFAULT_RELAY_URL

    def test_reads_yaml_sections(self):
        _write_config({
            "ai": {"mode": "direct", "model": "claude-sonnet-4-20250514"},
            "git": {"max_diff_size": 250, "rename_threshold": 0},
            "commit": {"max_subject_length": 50},
            "server": {"url": "https://relay.example.com", "timeout": 10},
            "editor": "nano",
        })

        config = load_config()

        assert config.mode == BackendMode.DIRECT
        assert config.model == "claude-sonnet-4-20250514"
        assert config.max_diff_size == 250
        assert config.rename_threshold == 0
        assert config.max_subject_length == 50
        assert config.relay_url == "https://relay.example.com"
        assert config.timeout == 10
        assert config.editor == "nano"

    def test_environment_overrides_file(self, monkeypatch):
        _write_config({"ai": {"mode": "direct"}, "server": {"url": "https://file.example.com"}})
        monkeypatch.setenv("GYST_MODE", "relay")
        monkeypatch.setenv("GYST_RELAY_URL", "https://env.example.com")

        config = load_config()

        assert config.mode == BackendMode.RELAY
        assert config.relay_url == "https://env.example.com"

    def test_api_key_from_credentials(self):
        global_config.save_credential("ANTHROPIC_API_KEY", "sk-from-file")
        assert load_config().api_key == "sk-from-file"

    def test_env_api_key_wins(self, monkeypatch):
        global_config.save_credential("ANTHROPIC_API_KEY", "sk-from-file")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-from-env")
        assert load_config().api_key == "sk-from-env"

    def test_overrides_win_and_none_is_ignored(self):
        _write_config({"git": {"max_diff_size": 250}})

        assert load_config(max_diff_size=40).max_diff_size == 40
        assert load_config(max_diff_size=None).max_diff_size == 250

    def test_mode_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("GYST_MODE", "DIRECT")
        assert load_config().mode == BackendMode.DIRECT

    def test_invalid_mode(self, monkeypatch):
        monkeypatch.setenv("GYST_MODE", "carrier-pigeon")
        with pytest.raises(GlobalConfigError, match="carrier-pigeon"):
            load_config()

    def test_invalid_value(self):
        _write_config({"git": {"max_diff_size": 0}})
        with pytest.raises(GlobalConfigError):
            load_config()
