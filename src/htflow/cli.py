"""CLI interface for htflow"""

import logging
import re
from pathlib import Path
from typing import Optional

import click

from htflow.application.repair_service import IncompleteQueryError, RepairInstructionsService
from htflow.domain.models.generation_result import GenerationResult
from htflow.domain.models.vehicle_query import VehicleQuery
from htflow.domain.prompts.repair_prompts import RepairPromptBuilder
from htflow.infrastructure.config.config_manager import ConfigManager
from htflow.infrastructure.errors import RequestError
from htflow.infrastructure.llm.base import LLMProvider
from htflow.infrastructure.llm.factory import LLMProviderFactory

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "Could not find repair instructions. Please try a different part or vehicle combination."
)
REQUEST_FAILED_MESSAGE = (
    "An error occurred while fetching instructions. Please check your network connection."
)

_BULLET_RE = re.compile(r"^[ \t]*\*", re.MULTILINE)
_NUMBERED_RE = re.compile(r"^[ \t]*(\d+)\.", re.MULTILINE)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def format_instructions(text: str) -> str:
    """Render markdown-style ``*`` bullets as ``•`` and left-align numbered steps"""
    text = _BULLET_RE.sub("•", text)
    return _NUMBERED_RE.sub(r"\1.", text).rstrip()


def _create_provider_config(config_manager: ConfigManager) -> dict:
    llm_config = config_manager.get_llm_config()
    retry_config = config_manager.get_retry_config()

    provider_config = {
        "model": llm_config.model,
        "grounding": llm_config.grounding,
        "temperature": llm_config.temperature,
        "max_output_tokens": llm_config.max_output_tokens,
        "timeout": llm_config.timeout,
    }
    provider_config.update(retry_config.model_dump())
    return provider_config


def _create_llm_provider(
    config_manager: ConfigManager,
    provider_override: Optional[str],
    verbose: bool,
) -> LLMProvider:
    """Create LLM provider from config

    Args:
        config_manager: Configuration manager
        provider_override: Optional provider override from CLI
        verbose: Verbose mode for error reporting
    """
    provider_type = provider_override or config_manager.get_llm_config().provider
    logger.info(f"Using LLM provider: {provider_type}")

    try:
        return LLMProviderFactory.create(provider_type, _create_provider_config(config_manager))
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)


def _output_results(result: GenerationResult) -> None:
    click.echo(format_instructions(result.text))

    if result.sources:
        click.echo("\nSources:")
        for source in result.sources:
            click.echo(f"  - {source.title or source.uri} <{source.uri}>")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .htflow.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """htflow - step-by-step car repair instructions"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option("--year", default="", help="Vehicle year, e.g. 2015")
@click.option("--make", default="", help="Vehicle make, e.g. Honda")
@click.option("--model", "model_name", default="", help="Vehicle model, e.g. Civic")
@click.option("--part", default="", help="Part to replace, e.g. 'front brake pads'")
@click.option(
    "--provider",
    type=str,
    help="LLM provider to use (mock, gemini). Overrides config.",
)
@click.option("--no-grounding", is_flag=True, help="Do not ask for web citations")
@click.pass_context
def instructions(
    ctx,
    year: str,
    make: str,
    model_name: str,
    part: str,
    provider: Optional[str],
    no_grounding: bool,
):
    """Get repair instructions for a vehicle part."""
    verbose = ctx.obj.get("verbose", False)
    query = VehicleQuery(year=year, make=make, model=model_name, part=part)
    if not query.is_complete:
        _die(str(IncompleteQueryError()), verbose=verbose)

    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
        llm_provider = _create_llm_provider(config_manager, provider, verbose)
        prompts_config = config_manager.get_prompts_config()
        service = RepairInstructionsService(
            llm_provider,
            prompt_builder=RepairPromptBuilder(prompts_config.system, prompts_config.query),
            grounding=False if no_grounding else None,
        )
        result = service.get_instructions(query)
    except click.ClickException:
        raise
    except RequestError as e:
        logger.debug(f"API call failed: {e}")
        _die(REQUEST_FAILED_MESSAGE, verbose=verbose, exc=e)
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=verbose, exc=e)

    if not result.found:
        _die(NOT_FOUND_MESSAGE, verbose=verbose)
    _output_results(result)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
