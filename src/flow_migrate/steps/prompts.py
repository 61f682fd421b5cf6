"""
Prompt table for the interactive converter.

Maps fragments of the converter's prompts to the single-character answer we
type back. Rules are checked in order and the first match wins, so more
specific prompts must come before generic ones.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from flow_migrate.errors import ConfigurationError


class PromptRule(BaseModel):
    """One recognized prompt and the answer to give it."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: str = Field(..., min_length=1, description="Substring or regex to look for")
    answer: Literal["y", "n"] = Field(..., description="Answer typed back to the converter")
    regex: bool = Field(False, description="Treat pattern as a regular expression")

    @model_validator(mode="after")
    def validate_regex(self) -> "PromptRule":
        """Regex patterns must compile."""
        if self.regex:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex {self.pattern!r}: {e}")
        return self

    def matches(self, text: str) -> bool:
        if self.regex:
            return re.search(self.pattern, text) is not None
        return self.pattern in text


class PromptTable(BaseModel):
    """Ordered prompt rules; static for one driver invocation."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rules: List[PromptRule] = Field(..., min_length=1)

    def match(self, text: str) -> Optional[str]:
        """Return the answer for the first rule found in text, or None."""
        for rule in self.rules:
            if rule.matches(text):
                return rule.answer
        return None


DEFAULT_PROMPT_TABLE = PromptTable(
    rules=[
        PromptRule(pattern="Do you want to configure build files", answer="y"),
        PromptRule(pattern="Do you want to continue", answer="y"),
        PromptRule(pattern="Do you want to override this", answer="n"),
    ]
)


def load_prompt_table(path: Path) -> PromptTable:
    """
    Load a prompt table from a YAML file.

    Accepts either a mapping with a ``rules`` key or a bare list of rules.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Prompt table file not found: {path}")

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    if isinstance(data, list):
        data = {"rules": data}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Prompt table must be a list or a mapping with 'rules', got {type(data).__name__}"
        )

    try:
        return PromptTable.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid prompt table in {path}: {e}")


def resolve_prompt_table(path: Optional[Path]) -> PromptTable:
    """Use the file at path when given, otherwise the built-in table."""
    if path is None:
        return DEFAULT_PROMPT_TABLE
    return load_prompt_table(path)
