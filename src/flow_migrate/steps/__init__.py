"""
Steps Package - the units of work the migration pipeline runs.

Each step is a coroutine that returns on success and raises a
MigrationError subclass on failure.
"""

from .artifacts import ensure_npmignore_entry, ensure_types_entry
from .converter import InteractiveProcessDriver, build_converter_command, convert_package
from .dependencies import add_helper_dependency, remove_runtime_dependency
from .path_check import check_path, get_path_argument
from .prerequisites import check_prerequisites, probe_executable
from .prompts import (
    DEFAULT_PROMPT_TABLE,
    PromptRule,
    PromptTable,
    load_prompt_table,
    resolve_prompt_table,
)

__all__ = [
    "add_helper_dependency",
    "build_converter_command",
    "check_path",
    "check_prerequisites",
    "convert_package",
    "ensure_npmignore_entry",
    "ensure_types_entry",
    "get_path_argument",
    "InteractiveProcessDriver",
    "load_prompt_table",
    "probe_executable",
    "PromptRule",
    "PromptTable",
    "DEFAULT_PROMPT_TABLE",
    "remove_runtime_dependency",
    "resolve_prompt_table",
]
