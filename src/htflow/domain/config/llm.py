"""LLM configuration model."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Configuration for the generative-language provider.

    Attributes:
        provider: LLM provider name
        model: Model identifier
        grounding: Enable the Google Search tool so answers carry citations
        temperature: Sampling temperature (0.0-2.0), None = API default
        max_output_tokens: Maximum tokens in response, None = API default
        timeout: Per-attempt HTTP timeout in seconds
    """

    provider: Literal["mock", "gemini"] = "gemini"
    model: str = "gemini-2.5-flash-preview-09-2025"
    grounding: bool = True
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = Field(None, gt=0)
    timeout: float = Field(60.0, gt=0.0)
