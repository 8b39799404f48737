"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from htflow.domain.config.llm import LLMConfig
from htflow.domain.config.prompts import PromptsConfig
from htflow.domain.config.retry import RetryConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Root model aggregating all configuration sections. Validation is performed
    at load time to fail fast on configuration errors.

    Attributes:
        llm: LLM provider configuration
        retry: Retry logic configuration
        prompts: Custom prompts configuration
    """

    llm: LLMConfig = Field(default_factory=LLMConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    prompts: PromptsConfig = Field(default_factory=PromptsConfig)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "llm": {
                    "provider": "gemini",
                    "model": "gemini-2.5-flash-preview-09-2025",
                    "grounding": True,
                    "timeout": 60,
                },
                "retry": {
                    "max_attempts": 5,
                    "initial_delay": 1.0,
                    "backoff_multiplier": 2.0,
                    "jitter": 1.0,
                },
                "prompts": {
                    "system": None,
                    "query": None,
                },
            }
        },
    )
