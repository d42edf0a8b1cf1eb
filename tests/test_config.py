"""Tests for config loading and validation."""

import pytest

from markdown_assistant.config import (
    API_KEY_ENV,
    CONFIG_PATH_ENV,
    AppConfig,
    EditorConfig,
    GeminiConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.gemini.model == "gemini-2.5-flash-preview-09-2025"
        assert config.gemini.max_retries == 3
        assert config.editor.min_selection_chars == 5
        assert config.editor.default_tone == "professional"
        assert config.api_key == ""

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.gemini.timeout == 60

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("gemini:\n  model: test-model\neditor:\n  default_tone: witty\n")
        config = load_config(yaml_path)
        assert config.gemini.model == "test-model"
        assert config.editor.default_tone == "witty"
        # Defaults for unspecified
        assert config.gemini.max_retries == 3

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        yaml_path = tmp_path / "custom.yaml"
        yaml_path.write_text("gemini:\n  max_retries: 1\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(yaml_path))
        assert load_config().gemini.max_retries == 1

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "env-key")
        assert load_config().api_key == "env-key"

    def test_api_key_hidden_from_repr(self):
        assert "secret" not in repr(AppConfig(api_key="secret"))

    def test_frozen_config(self):
        config = GeminiConfig()
        with pytest.raises(AttributeError):
            config.model = "changed"


class TestConfigValidation:
    def test_invalid_max_retries(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("gemini:\n  max_retries: 99\n")
        with pytest.raises(ValueError, match="max_retries"):
            load_config(yaml)

    def test_invalid_timeout(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("gemini:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_min_selection_chars(self):
        with pytest.raises(ValueError, match="min_selection_chars"):
            EditorConfig(min_selection_chars=0)

    def test_unknown_default_tone(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("editor:\n  default_tone: sarcastic\n")
        with pytest.raises(ValueError, match="default_tone"):
            load_config(yaml)

    def test_negative_status_reset(self):
        with pytest.raises(ValueError, match="status_reset_seconds"):
            EditorConfig(status_reset_seconds=-1)
