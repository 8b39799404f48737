"""Gemini provider (generativelanguage.googleapis.com generateContent)."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from htflow.domain.models.generation_result import GenerationResult, Source
from htflow.infrastructure.errors import ParseError
from htflow.infrastructure.http_client import (
    Request,
    RetryingRequestExecutor,
    retry_config_from_dict,
)
from htflow.infrastructure.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Google generative-language API provider with Google Search grounding."""

    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    API_KEY_ENV = "GEMINI_API_KEY"
    DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        executor: Optional[RetryingRequestExecutor] = None,
    ):
        """Initialize Gemini provider

        Args:
            config: Configuration dictionary with:
                - api_key: API key (or from GEMINI_API_KEY env)
                - model: Model name
                - grounding: Attach the google_search tool (default: True)
                - temperature / max_output_tokens: Optional generation settings
                - timeout: Per-attempt timeout in seconds (default: 60)
                - max_attempts, initial_delay, backoff_multiplier, jitter: retry settings
            executor: Pre-built executor (overrides timeout and retry settings)
        """
        if config is None:
            config = {}
        super().__init__(config)

        self.api_key = config.get("api_key") or os.getenv(self.API_KEY_ENV)
        self.model = config.get("model") or self.DEFAULT_MODEL
        self.grounding = bool(config.get("grounding", True))
        self.temperature = config.get("temperature")
        self.max_output_tokens = config.get("max_output_tokens")
        self.executor = executor or RetryingRequestExecutor(
            retry_config_from_dict(config),
            timeout=float(config.get("timeout", 60)),
        )

    def _validate_config(self, config: Dict[str, Any]) -> None:
        api_key = config.get("api_key") or os.getenv(self.API_KEY_ENV)
        if not api_key:
            raise ValueError(
                "Gemini API key is required. "
                f"Set {self.API_KEY_ENV} environment variable or provide api_key in config."
            )

        if "model" in config and not isinstance(config["model"], str):
            raise ValueError("model must be a string")

        temp = config.get("temperature")
        if temp is not None and (not isinstance(temp, (int, float)) or not (0.0 <= temp <= 2.0)):
            raise ValueError("temperature must be between 0.0 and 2.0")

        max_tok = config.get("max_output_tokens")
        if max_tok is not None and (not isinstance(max_tok, int) or max_tok < 1):
            raise ValueError("max_output_tokens must be a positive integer")

    def build_payload(
        self, prompt: str, system_instruction: Optional[str] = None, **kwargs
    ) -> Dict[str, Any]:
        """Build the generateContent request body"""
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}

        if kwargs.get("grounding", self.grounding):
            payload["tools"] = [{"google_search": {}}]

        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        generation_config: Dict[str, Any] = {}
        temperature = kwargs.get("temperature", self.temperature)
        if temperature is not None:
            generation_config["temperature"] = temperature
        max_output_tokens = kwargs.get("max_output_tokens", self.max_output_tokens)
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens
        if generation_config:
            payload["generationConfig"] = generation_config

        return payload

    def generate(
        self, prompt: str, system_instruction: Optional[str] = None, **kwargs
    ) -> GenerationResult:
        """Generate a grounded answer

        Raises:
            RequestError: If the request fails after retries
            ParseError: If the response is not a JSON object
        """
        model = kwargs.get("model", self.model)
        url = f"{self.API_URL.format(model=model)}?key={self.api_key}"
        request = Request.post_json(url, self.build_payload(prompt, system_instruction, **kwargs))

        logger.debug(f"Gemini API call (model={model}, grounding={kwargs.get('grounding', self.grounding)})")
        response = self.executor.execute(request)

        data = response.json()
        if not isinstance(data, dict):
            raise ParseError("Gemini response is not a JSON object")
        result = parse_generate_content(data)
        logger.debug(
            f"Gemini API response received ({len(result.text or '')} chars, "
            f"{len(result.sources)} sources)"
        )
        return result


def _first(items: Any) -> Dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _web_sources(entries: Any) -> Iterable[Source]:
    if not isinstance(entries, list):
        return
    for entry in entries:
        web = entry.get("web") if isinstance(entry, dict) else None
        if not isinstance(web, dict):
            continue
        uri, title = web.get("uri"), web.get("title")
        if uri and title:
            yield Source(uri=uri, title=title)


def parse_generate_content(data: Dict[str, Any]) -> GenerationResult:
    """Extract text and grounding sources from a generateContent response

    Text comes from the first part of the first candidate. Sources come from
    groundingAttributions and groundingChunks, keeping entries that have both
    uri and title, de-duplicated by uri.
    """
    candidate = _first(data.get("candidates"))
    content = candidate.get("content")
    part = _first(content.get("parts")) if isinstance(content, dict) else {}
    text = part.get("text") or None

    metadata = candidate.get("groundingMetadata")
    sources: List[Source] = []
    if isinstance(metadata, dict):
        seen = set()
        for key in ("groundingAttributions", "groundingChunks"):
            for source in _web_sources(metadata.get(key)):
                if source.uri not in seen:
                    seen.add(source.uri)
                    sources.append(source)

    return GenerationResult(text=text, sources=sources)
