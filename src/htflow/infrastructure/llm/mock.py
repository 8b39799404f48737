"""Mock LLM provider for testing and offline use"""

import time
from typing import Any, Dict, Optional

from htflow.domain.models.generation_result import GenerationResult, Source
from htflow.infrastructure.llm.base import LLMProvider


class MockLLMProvider(LLMProvider):
    """Mock LLM provider that returns predefined responses"""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize mock provider

        Args:
            config: Optional configuration with:
                - delay: Simulated API delay in seconds (default: 0.0)
                - responses: Dict mapping prompts to response text
                - sources: List of {"uri", "title"} dicts attached to every answer
        """
        if config is None:
            config = {}
        super().__init__(config)
        self.delay = config.get("delay", 0.0)
        self.responses = config.get("responses", {})
        self.sources = [Source(uri=s["uri"], title=s["title"]) for s in config.get("sources") or []]

    def _validate_config(self, config: Dict[str, Any]) -> None:
        if "delay" in config and not isinstance(config["delay"], (int, float)):
            raise ValueError("delay must be a number")
        if "delay" in config and config["delay"] < 0:
            raise ValueError("delay must be non-negative")
        sources = config.get("sources") or []
        if not isinstance(sources, list):
            raise ValueError("sources must be a list")
        for source in sources:
            if not isinstance(source, dict) or "uri" not in source or "title" not in source:
                raise ValueError("each source must have uri and title")

    def generate(
        self, prompt: str, system_instruction: Optional[str] = None, **kwargs
    ) -> GenerationResult:
        if self.delay:
            time.sleep(self.delay)

        if prompt in self.responses:
            return GenerationResult(text=self.responses[prompt], sources=list(self.sources))
        if "replacing" in prompt.lower():
            return GenerationResult(text=self._default_instructions(), sources=list(self.sources))
        return GenerationResult(text="Mock LLM response", sources=list(self.sources))

    def _default_instructions(self) -> str:
        return """Tools Required
* Socket set
* Torque wrench
* Jack and jack stands

Step-by-Step Procedure
1. Lift the vehicle and support it on jack stands.
2. Remove the fasteners holding the old part.
3. Install the new part and torque fasteners to specification.
4. Lower the vehicle.
"""
