"""
Package manager steps.

Dependencies are changed through the package manager rather than by editing
package.json directly, so lockfiles and workspaces stay consistent.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from flow_migrate.errors import PackageManagerError
from flow_migrate.observability import get_logger
from flow_migrate.steps.prerequisites import PACKAGE_MANAGER
from flow_migrate.steps.process import NEW_SESSION, kill_process_tree

logger = get_logger(__name__)

RUNTIME_DEPENDENCY = "@babel/runtime"
HELPER_DEPENDENCY = "tslib"


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_package_manager(args: str, cwd: str, timeout: float = 600.0) -> CommandResult:
    """
    Run a package manager command in cwd and capture its output.

    Raises:
        PackageManagerError: If it cannot be started or exceeds timeout
    """
    command = f"{PACKAGE_MANAGER} {args}"
    logger.info("Running %s in %s", command, cwd)

    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=NEW_SESSION,
        )
    except OSError as e:
        raise PackageManagerError(f"Unable to run `{command}`: {e}")

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        kill_process_tree(proc)
        await proc.wait()
        raise PackageManagerError(f"`{command}` timed out after {timeout:g}s")

    result = CommandResult(
        returncode=proc.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    logger.debug("%s exited with %s", command, result.returncode)
    return result


async def remove_runtime_dependency(path: str, timeout: float = 600.0) -> bool:
    """
    Remove @babel/runtime from the package.

    Returns:
        True if it was removed, False if it was never installed
    """
    result = await run_package_manager(f"remove {RUNTIME_DEPENDENCY}", cwd=path, timeout=timeout)
    if result.ok:
        return True

    not_installed = f'You do not have a dependency named "{RUNTIME_DEPENDENCY}" installed'
    if not_installed in result.stderr:
        logger.info("%s is not installed, nothing to remove", RUNTIME_DEPENDENCY)
        return False

    raise PackageManagerError(
        f"Failed to remove {RUNTIME_DEPENDENCY}: {result.stderr}", stderr=result.stderr
    )


async def add_helper_dependency(path: str, timeout: float = 600.0) -> None:
    """Add tslib to the package. Adding an existing dependency is a no-op for the package manager."""
    result = await run_package_manager(f"add {HELPER_DEPENDENCY}", cwd=path, timeout=timeout)
    if not result.ok:
        raise PackageManagerError(
            f"Failed to add {HELPER_DEPENDENCY}: {result.stderr}", stderr=result.stderr
        )
