"""
Prerequisite probes.

Both executables are looked up concurrently; the step succeeds only when every
probe does.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from typing import Optional

from flow_migrate.errors import PrerequisiteError
from flow_migrate.observability import get_logger
from flow_migrate.steps.console import code

logger = get_logger(__name__)

PACKAGE_MANAGER = "bolt"
CONVERTER = "flowtees"
CONVERTER_INSTALL = "pip3 install flowtees"


async def probe_executable(name: str, hint: Optional[str] = None) -> str:
    """
    Resolve an executable on PATH.

    Returns:
        Absolute path of the executable

    Raises:
        PrerequisiteError: If it cannot be found, with the install hint appended
    """
    found = await asyncio.to_thread(shutil.which, name)
    if found is None:
        message = f"Unable to find {code(name)} on system."
        if hint:
            message += f"{os.linesep}Run: {code(hint)}"
        raise PrerequisiteError(message, tool=name)

    logger.debug("Found %s at %s", name, found)
    return found


async def check_prerequisites() -> None:
    """Probe the package manager and converter; the first failure wins."""
    await asyncio.gather(
        probe_executable(PACKAGE_MANAGER),
        probe_executable(CONVERTER, hint=CONVERTER_INSTALL),
    )
