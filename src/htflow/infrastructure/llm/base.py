"""Base LLM provider interface"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from htflow.domain.models.generation_result import GenerationResult


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    def __init__(self, config: Dict[str, Any]):
        """Initialize provider with configuration

        Args:
            config: Provider configuration dictionary

        Raises:
            ValueError: If configuration is invalid
        """
        self.config = config
        self._validate_config(config)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate provider configuration

        Raises:
            ValueError: If configuration is invalid
        """
        # Override in subclasses for specific validation
        pass

    @abstractmethod
    def generate(
        self, prompt: str, system_instruction: Optional[str] = None, **kwargs
    ) -> GenerationResult:
        """Generate response from LLM

        Args:
            prompt: User query
            system_instruction: Optional system instruction
            **kwargs: Additional parameters (model, grounding, ...)

        Returns:
            Generated text with grounding sources

        Raises:
            RequestError: If the request fails
        """
        pass
