"""LLM providers"""

from htflow.infrastructure.llm.base import LLMProvider
from htflow.infrastructure.llm.gemini import GeminiProvider
from htflow.infrastructure.llm.mock import MockLLMProvider

__all__ = ["LLMProvider", "GeminiProvider", "MockLLMProvider"]
