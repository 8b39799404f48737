"""Repair instructions service - turns a vehicle query into instructions"""

from __future__ import annotations

import logging
from typing import Optional

from htflow.domain.models.generation_result import GenerationResult
from htflow.domain.models.vehicle_query import VehicleQuery
from htflow.domain.prompts.repair_prompts import RepairPromptBuilder
from htflow.infrastructure.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class IncompleteQueryError(ValueError):
    """Raised when a vehicle or part field is blank."""

    def __init__(self, message: str = "Please fill in all vehicle and part details."):
        super().__init__(message)


class RepairInstructionsService:
    """Service for fetching repair instructions"""

    def __init__(
        self,
        llm_provider: LLMProvider,
        prompt_builder: Optional[RepairPromptBuilder] = None,
        grounding: Optional[bool] = None,
    ):
        """Initialize repair instructions service

        Args:
            llm_provider: LLM provider instance
            prompt_builder: Prompt builder (default templates if None)
            grounding: Override the provider's grounding setting
        """
        self.llm_provider = llm_provider
        self.prompt_builder = prompt_builder or RepairPromptBuilder()
        self.grounding = grounding

    def get_instructions(self, query: VehicleQuery) -> GenerationResult:
        """Fetch instructions for replacing a part

        Args:
            query: Vehicle and part details

        Returns:
            Generated instructions with sources; ``found`` is False when the
            API returned no text

        Raises:
            IncompleteQueryError: If any field is blank
            RequestError: If the API request fails
        """
        if not query.is_complete:
            raise IncompleteQueryError()

        logger.info(f"Requesting instructions for {query.part} on {query.vehicle}")
        kwargs = {}
        if self.grounding is not None:
            kwargs["grounding"] = self.grounding

        result = self.llm_provider.generate(
            self.prompt_builder.build_query(query),
            system_instruction=self.prompt_builder.build_system_instruction(),
            **kwargs,
        )
        if not result.found:
            logger.warning(f"No instructions returned for {query.part} on {query.vehicle}")
        return result
