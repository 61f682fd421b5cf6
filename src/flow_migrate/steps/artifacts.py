"""
Config artifact patchers.

Each patcher reads its file, checks whether the target state already holds,
and only writes when it does not. Running a patcher twice leaves the file as
the first run did.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict

from flow_migrate.errors import ArtifactError, ConflictError
from flow_migrate.observability import get_logger

logger = get_logger(__name__)

NPMIGNORE = ".npmignore"
IGNORED_ENTRY = "index.ts"
IGNORE_COMMENT = "# Ignoring generated index.ts"

MANIFEST = "package.json"
TYPES_FIELD = "types"
TYPES_ENTRY = "index.d.ts"

# Two spaces, matching what the monorepo's tooling writes
MANIFEST_INDENT = 2


def _read_text(path: Path, errors: str = "strict") -> str:
    return path.read_text(encoding="utf-8", errors=errors)


def _append_text(path: Path, text: str) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(text)


def _write_text(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


async def ensure_npmignore_entry(package_dir: str) -> bool:
    """
    Make sure the generated index.ts is excluded from publishing.

    Returns:
        True if .npmignore was changed

    Raises:
        ArtifactError: If .npmignore is missing or cannot be written
    """
    filepath = Path(package_dir) / NPMIGNORE

    try:
        contents = await asyncio.to_thread(_read_text, filepath, "replace")
    except OSError:
        raise ArtifactError(f"Unable to find {NPMIGNORE}")

    if IGNORED_ENTRY in contents:
        logger.info("%s already lists %s", NPMIGNORE, IGNORED_ENTRY)
        return False

    try:
        await asyncio.to_thread(
            _append_text, filepath, f"\n{IGNORE_COMMENT}\n{IGNORED_ENTRY}"
        )
    except OSError:
        raise ArtifactError(f"Unable to add {IGNORED_ENTRY} to {NPMIGNORE}")

    logger.info("Added %s to %s", IGNORED_ENTRY, filepath)
    return True


def render_manifest(manifest: Dict[str, Any], trailing_newline: bool = False) -> str:
    """Serialize a manifest with stable indentation for reproducible diffs."""
    text = json.dumps(manifest, indent=MANIFEST_INDENT, ensure_ascii=False)
    return text + "\n" if trailing_newline else text


def _is_unset(value: Any) -> bool:
    """Only JSON values that are falsy in JavaScript count as unset; [] and {} do not."""
    if value is None or value is False or value == "":
        return True
    return type(value) in (int, float) and value == 0


async def ensure_types_entry(package_dir: str) -> bool:
    """
    Make sure package.json declares the generated type declarations.

    An existing, different ``types`` value is left alone and reported as a
    conflict; someone has to decide which one is right.

    Returns:
        True if package.json was changed

    Raises:
        ArtifactError: If package.json cannot be read, parsed or written
        ConflictError: If ``types`` already points somewhere else
    """
    filepath = Path(package_dir) / MANIFEST

    try:
        contents = await asyncio.to_thread(_read_text, filepath)
    except OSError:
        raise ArtifactError(f"Unable to read {MANIFEST}")
    except UnicodeDecodeError:
        raise ArtifactError(f"Unable to parse {MANIFEST}")

    try:
        manifest = json.loads(contents)
    except json.JSONDecodeError:
        raise ArtifactError(f"Unable to parse {MANIFEST}")
    if not isinstance(manifest, dict):
        raise ArtifactError(f"Unable to parse {MANIFEST}")

    existing = manifest.get(TYPES_FIELD)
    if not _is_unset(existing):
        if existing == TYPES_ENTRY:
            logger.info("%s already declares %s", MANIFEST, TYPES_ENTRY)
            return False
        raise ConflictError(
            f"Unexpected existing {TYPES_FIELD} entry in {MANIFEST}: {existing}"
        )

    updated = {**manifest, TYPES_FIELD: TYPES_ENTRY}
    text = render_manifest(updated, trailing_newline=contents.endswith("\n"))

    try:
        await asyncio.to_thread(_write_text, filepath, text)
    except OSError:
        raise ArtifactError(f"Unable to write to {MANIFEST}")

    logger.info("Set %s to %s in %s", TYPES_FIELD, TYPES_ENTRY, filepath)
    return True
