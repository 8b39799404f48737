"""Configuration manager for loading and validating .htflow.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from htflow.domain.config import AppConfig, LLMConfig, PromptsConfig, RetryConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".htflow.yml"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .htflow.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .htflow.yml file (searched from current directory upwards)
    3. Environment variables (HTFLOW_LLM_PROVIDER, HTFLOW_LLM_MODEL)
    4. CLI arguments (handled by CLI layer)
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .htflow.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Raises:
            ValidationError: If configuration is invalid
            ConfigurationError: If the file is not valid YAML
        """
        config_dict: Dict[str, Any] = copy.deepcopy(AppConfig().model_dump())

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping")
            self._check_sections(file_config)
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _check_sections(self, file_config: Dict[str, Any]) -> None:
        """Reject known sections that are not mappings (e.g. an empty `llm:` key)"""
        errors = [
            f"  - {key}: must be a mapping, got {type(value).__name__}"
            for key, value in file_config.items()
            if key in AppConfig.model_fields and not isinstance(value, dict)
        ]
        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            )

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if os.getenv("HTFLOW_LLM_PROVIDER"):
            config["llm"]["provider"] = os.getenv("HTFLOW_LLM_PROVIDER")

        if os.getenv("HTFLOW_LLM_MODEL"):
            config["llm"]["model"] = os.getenv("HTFLOW_LLM_MODEL")

        # API keys are handled by providers themselves
        return config

    def get_llm_config(self) -> LLMConfig:
        return self.config.llm

    def get_retry_config(self) -> RetryConfig:
        return self.config.retry

    def get_prompts_config(self) -> PromptsConfig:
        return self.config.prompts
