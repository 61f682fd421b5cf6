"""
flow-migrate CLI - Main entry point.

Usage:
    flow-migrate PATH

Converts the package at PATH from Flow to TypeScript, then patches its
dependencies, .npmignore and package.json.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Tuple

import click
from pydantic import ValidationError

from flow_migrate.config import Settings, get_settings
from flow_migrate.errors import ConfigurationError
from flow_migrate.observability import get_logger, setup_logging
from flow_migrate.pipelines import PipelineRunner, build_migration_pipeline
from flow_migrate.steps import resolve_prompt_table

logger = get_logger("flow_migrate")


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("paths", nargs=-1, type=click.UNPROCESSED)
def cli(paths: Tuple[str, ...]):
    """
    Migrate a package from Flow to TypeScript.

    PATH: Package directory to migrate (exactly one)
    """
    try:
        settings = _load_settings()
        setup_logging(settings)
        prompts = resolve_prompt_table(settings.prompts_file)
    except ConfigurationError as e:
        click.echo(e.message)
        click.echo("")
        sys.exit(1)

    steps = build_migration_pipeline(list(paths), settings, prompts=prompts)
    runner = PipelineRunner()
    result = asyncio.run(runner.run(steps))

    if not result.is_success():
        click.echo(result.error)
        click.echo("")
        sys.exit(1)

    logger.info("Migration finished in %dms", result.duration_ms)


def main() -> None:
    """Console script entry point."""
    cli()
