"""GenerationResult model - generated text plus its grounding sources"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Source:
    """A grounding attribution: a web page the answer was based on"""

    uri: str
    title: str


@dataclass
class GenerationResult:
    """Result of one generate call"""

    text: Optional[str] = None  # None when the API returned no candidate text
    sources: List[Source] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """Check if the API produced any text"""
        return bool(self.text and self.text.strip())
