"""
The Flow-to-TypeScript migration pipeline.

``build_migration_pipeline`` is a pure factory: it returns the fixed, ordered
list of steps and touches nothing until a runner awaits them.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from flow_migrate.config import Settings
from flow_migrate.errors import ArgumentError
from flow_migrate.steps import (
    DEFAULT_PROMPT_TABLE,
    PromptTable,
    add_helper_dependency,
    check_path,
    check_prerequisites,
    convert_package,
    ensure_npmignore_entry,
    ensure_types_entry,
    get_path_argument,
    remove_runtime_dependency,
)
from flow_migrate.steps.artifacts import IGNORED_ENTRY, MANIFEST, NPMIGNORE, TYPES_FIELD
from flow_migrate.steps.console import code
from flow_migrate.steps.dependencies import HELPER_DEPENDENCY, RUNTIME_DEPENDENCY
from flow_migrate.steps.prerequisites import CONVERTER
from .models import Step


def build_migration_pipeline(
    args: Sequence[str],
    settings: Settings,
    prompts: Optional[PromptTable] = None,
) -> List[Step]:
    """
    Build the migration steps for the given command-line arguments.

    The path is validated by the first step only; later steps receive it as
    is and are never reached when validation fails.

    Args:
        args: Raw positional arguments
        settings: Operational settings (timeouts, strict exit)
        prompts: Prompt table for the converter; defaults to the built-in one

    Returns:
        Steps in execution order
    """
    path: Optional[str] = get_path_argument(args)
    prompts = prompts or DEFAULT_PROMPT_TABLE

    # Only reached after check_path succeeded, so path is a real directory
    def target() -> str:
        if not path:
            raise ArgumentError("unable to find [path] argument")
        return path

    return [
        Step(
            title="Checking path",
            run=lambda: check_path(path),
        ),
        Step(
            title="Checking prerequisites",
            run=check_prerequisites,
        ),
        Step(
            title=f"Generating tsconfig and converting files (with {code(CONVERTER)})",
            run=lambda: convert_package(
                target(),
                prompts=prompts,
                idle_timeout=settings.prompt_idle_timeout_s,
                timeout=settings.converter_timeout_s,
                strict_exit=settings.strict_converter_exit,
            ),
        ),
        Step(
            title=f"Removing {code(RUNTIME_DEPENDENCY)} dependency",
            run=lambda: remove_runtime_dependency(
                target(), timeout=settings.package_manager_timeout_s
            ),
        ),
        Step(
            title=f"Adding {code(HELPER_DEPENDENCY)} dependency",
            run=lambda: add_helper_dependency(
                target(), timeout=settings.package_manager_timeout_s
            ),
        ),
        Step(
            title=f"Adding {code(IGNORED_ENTRY)} to {code(NPMIGNORE)}",
            run=lambda: ensure_npmignore_entry(target()),
        ),
        Step(
            title=f"Adding {code(TYPES_FIELD)} entry to {code(MANIFEST)}",
            run=lambda: ensure_types_entry(target()),
        ),
    ]
