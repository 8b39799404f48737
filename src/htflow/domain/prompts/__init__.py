"""Prompt templates for repair instructions"""

from htflow.domain.prompts.repair_prompts import RepairPromptBuilder

__all__ = ["RepairPromptBuilder"]
