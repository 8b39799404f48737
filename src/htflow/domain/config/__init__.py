"""Configuration models with Pydantic validation."""

from htflow.domain.config.app import AppConfig
from htflow.domain.config.llm import LLMConfig
from htflow.domain.config.prompts import PromptsConfig
from htflow.domain.config.retry import RetryConfig

__all__ = [
    "AppConfig",
    "LLMConfig",
    "PromptsConfig",
    "RetryConfig",
]
