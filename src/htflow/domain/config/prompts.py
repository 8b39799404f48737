"""Prompts configuration model."""

from typing import Optional

from pydantic import BaseModel


class PromptsConfig(BaseModel):
    """Configuration for custom prompts.

    Attributes:
        system: Custom system instruction (None = use default)
        query: Custom query template with {year}, {make}, {model}, {part} (None = use default)
    """

    system: Optional[str] = None
    query: Optional[str] = None
