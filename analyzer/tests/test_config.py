"""
Tests for configuration defaults and environment overrides.
"""

import pytest

from analyzer.shared.config import DEFAULT_CONFIG, get_config, load_config


class TestGetConfig:

    def test_defaults(self):
        config = get_config()

        assert config.model == "gpt-4o-mini"
        assert config.max_attempts == 3
        assert config.min_request_interval == 1.0
        assert config.max_content_chars == 8000
        assert config.agent_timeout == 60.0
        assert config.stream_timeout == 300.0
        assert config.chunk_size == 500

    def test_overrides_applied(self):
        config = get_config(agent_timeout=5.0, max_attempts=2)

        assert config.agent_timeout == 5.0
        assert config.max_attempts == 2
        assert DEFAULT_CONFIG.agent_timeout == 60.0

    def test_none_overrides_ignored(self):
        assert get_config(model=None) == DEFAULT_CONFIG


class TestLoadConfig:

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANALYZER_AGENT_TIMEOUT", "12.5")
        monkeypatch.setenv("ANALYZER_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("ANALYZER_MODEL", "gpt-4o")

        config = load_config(env_file=str(tmp_path / "missing.env"))

        assert config.agent_timeout == 12.5
        assert config.max_attempts == 5
        assert config.model == "gpt-4o"

    def test_blank_values_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANALYZER_CHUNK_SIZE", "  ")

        config = load_config(env_file=str(tmp_path / "missing.env"))

        assert config.chunk_size == 500

    def test_invalid_value(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANALYZER_MAX_ATTEMPTS", "three")

        with pytest.raises(ValueError, match="ANALYZER_MAX_ATTEMPTS"):
            load_config(env_file=str(tmp_path / "missing.env"))

    def test_env_file(self, monkeypatch, tmp_path):
        # Registered so the value loaded from the file is removed afterwards
        monkeypatch.setenv("ANALYZER_STREAM_TIMEOUT", "")
        monkeypatch.delenv("ANALYZER_STREAM_TIMEOUT")
        env_file = tmp_path / ".env"
        env_file.write_text("ANALYZER_STREAM_TIMEOUT=42\n")

        config = load_config(env_file=str(env_file))

        assert config.stream_timeout == 42.0
