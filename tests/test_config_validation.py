"""Tests for configuration validation with Pydantic."""

import pytest
import yaml
from pydantic import ValidationError

from htflow.domain.config import AppConfig, LLMConfig, PromptsConfig, RetryConfig
from htflow.infrastructure.config.config_manager import ConfigManager, ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("HTFLOW_LLM_PROVIDER", raising=False)
    monkeypatch.delenv("HTFLOW_LLM_MODEL", raising=False)


class TestLLMConfigValidation:
    """Tests for LLMConfig validation."""

    def test_defaults(self):
        config = LLMConfig()
        assert config.provider == "gemini"
        assert config.model == "gemini-2.5-flash-preview-09-2025"
        assert config.grounding is True
        assert config.temperature is None

    def test_invalid_provider(self):
        with pytest.raises(ValidationError, match="provider"):
            LLMConfig(provider="openai")

    def test_temperature_too_high(self):
        with pytest.raises(ValidationError, match="temperature"):
            LLMConfig(temperature=3.0)

    def test_max_output_tokens_zero(self):
        with pytest.raises(ValidationError, match="max_output_tokens"):
            LLMConfig(max_output_tokens=0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError, match="timeout"):
            LLMConfig(timeout=0)


class TestRetryConfigValidation:
    """Tests for RetryConfig validation."""

    def test_defaults(self):
        config = RetryConfig()
        assert config.max_attempts == 5
        assert config.initial_delay == 1.0
        assert config.backoff_multiplier == 2.0
        assert config.jitter == 1.0

    def test_max_attempts_zero(self):
        with pytest.raises(ValidationError, match="max_attempts"):
            RetryConfig(max_attempts=0)

    def test_max_attempts_too_high(self):
        with pytest.raises(ValidationError, match="max_attempts"):
            RetryConfig(max_attempts=11)

    def test_backoff_multiplier_below_one(self):
        with pytest.raises(ValidationError, match="backoff_multiplier"):
            RetryConfig(backoff_multiplier=0.5)

    def test_negative_jitter(self):
        with pytest.raises(ValidationError, match="jitter"):
            RetryConfig(jitter=-0.1)


class TestAppConfig:
    def test_rejects_unknown_section(self):
        with pytest.raises(ValidationError):
            AppConfig(cache={})

    def test_prompts_default_to_none(self):
        assert PromptsConfig().system is None
        assert PromptsConfig().query is None


class TestConfigManager:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager()

        assert manager.config_path is None
        assert manager.get_llm_config().provider == "gemini"
        assert manager.get_retry_config().max_attempts == 5

    def test_loads_yaml_file(self, tmp_path):
        config_file = tmp_path / ".htflow.yml"
        config_file.write_text(
            yaml.safe_dump(
                {
                    "llm": {"provider": "mock", "grounding": False},
                    "retry": {"max_attempts": 3},
                    "prompts": {"system": "Be brief."},
                }
            ),
            encoding="utf-8",
        )

        manager = ConfigManager(config_path=config_file)

        assert manager.get_llm_config().provider == "mock"
        assert manager.get_llm_config().grounding is False
        assert manager.get_llm_config().model == "gemini-2.5-flash-preview-09-2025"
        assert manager.get_retry_config().max_attempts == 3
        assert manager.get_retry_config().jitter == 1.0
        assert manager.get_prompts_config().system == "Be brief."

    def test_finds_file_in_parent_directory(self, tmp_path, monkeypatch):
        (tmp_path / ".htflow.yml").write_text("llm:\n  provider: mock\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        manager = ConfigManager()

        assert manager.config_path == tmp_path / ".htflow.yml"
        assert manager.get_llm_config().provider == "mock"

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HTFLOW_LLM_PROVIDER", "mock")
        monkeypatch.setenv("HTFLOW_LLM_MODEL", "gemini-2.0-flash")

        manager = ConfigManager()

        assert manager.get_llm_config().provider == "mock"
        assert manager.get_llm_config().model == "gemini-2.0-flash"

    @pytest.mark.parametrize("env_var", ["HTFLOW_LLM_PROVIDER", "HTFLOW_LLM_MODEL"])
    def test_empty_section_with_env_override(self, tmp_path, monkeypatch, env_var):
        config_file = tmp_path / ".htflow.yml"
        config_file.write_text("llm:\n", encoding="utf-8")
        monkeypatch.setenv(env_var, "mock")

        with pytest.raises(ConfigurationError, match="llm: must be a mapping"):
            ConfigManager(config_path=config_file)

    def test_non_mapping_section(self, tmp_path):
        config_file = tmp_path / ".htflow.yml"
        config_file.write_text("retry: 3\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="retry: must be a mapping, got int"):
            ConfigManager(config_path=config_file)

    def test_invalid_values_raise_configuration_error(self, tmp_path):
        config_file = tmp_path / ".htflow.yml"
        config_file.write_text("retry:\n  max_attempts: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="retry.max_attempts"):
            ConfigManager(config_path=str(config_file))

    def test_invalid_yaml_raises_configuration_error(self, tmp_path):
        config_file = tmp_path / ".htflow.yml"
        config_file.write_text("llm: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            ConfigManager(config_path=config_file)
