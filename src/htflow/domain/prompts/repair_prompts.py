"""Repair instruction prompt templates"""

from __future__ import annotations

from typing import Optional

from htflow.domain.models.vehicle_query import VehicleQuery


class RepairPromptBuilder:
    """Builder for the user query and system instruction"""

    DEFAULT_SYSTEM_PROMPT = (
        "You are a professional automotive technician and clear instructional writer. "
        "Your task is to provide concise, easy-to-follow, step-by-step instructions for "
        "performing a specific car repair. Structure the response clearly, starting with a "
        "'Tools Required' section (a simple list) followed by 'Step-by-Step Procedure' "
        "(a numbered list). Do not include any conversational preamble, safety warnings, or "
        "lengthy explanations unless it is a necessary part of the first step. Focus only on "
        "the tools required and the procedural steps."
    )

    DEFAULT_QUERY_TEMPLATE = (
        "Provide the tool list and detailed, numbered steps for replacing the {part} "
        "on a {year} {make} {model}. Focus on clarity, safety, and conciseness."
    )

    def __init__(
        self,
        custom_system_prompt: Optional[str] = None,
        custom_query_template: Optional[str] = None,
    ):
        """Initialize prompt builder

        Args:
            custom_system_prompt: Replaces the default system instruction
            custom_query_template: Replaces the default query; may use
                {year}, {make}, {model} and {part} placeholders
        """
        self.system_prompt = custom_system_prompt or self.DEFAULT_SYSTEM_PROMPT
        self.query_template = custom_query_template or self.DEFAULT_QUERY_TEMPLATE

    def build_query(self, query: VehicleQuery) -> str:
        """Build the user query for a vehicle and part

        Raises:
            ValueError: If a custom template uses an unknown placeholder
        """
        try:
            return self.query_template.format(
                year=query.year,
                make=query.make,
                model=query.model,
                part=query.part,
            )
        except (KeyError, IndexError) as e:
            raise ValueError(f"Invalid placeholder in query template: {e}") from e

    def build_system_instruction(self) -> str:
        return self.system_prompt
