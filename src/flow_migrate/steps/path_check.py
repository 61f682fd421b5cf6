"""Validate the single path argument."""

from __future__ import annotations

import asyncio
import os
import stat
from typing import Optional, Sequence

from flow_migrate.errors import ArgumentError, PathValidationError
from flow_migrate.steps.console import code


def get_path_argument(args: Sequence[str]) -> Optional[str]:
    """Return the trimmed path when exactly one argument was given."""
    if len(args) != 1:
        return None
    return args[0].strip()


async def check_path(path: Optional[str]) -> None:
    """
    Confirm path names an existing directory.

    The entry itself is inspected (lstat), so a symlink to a directory is
    rejected like any other non-directory.

    Raises:
        ArgumentError: If no usable path argument was given
        PathValidationError: If the path is missing, not a directory, or unreadable
    """
    if not path:
        raise ArgumentError("unable to find [path] argument")

    try:
        st = await asyncio.to_thread(os.lstat, path)
    except FileNotFoundError:
        raise PathValidationError(
            f'Could not find anything at path: "{code(path)}"', path=path
        )
    except OSError as e:
        raise PathValidationError(str(e), path=path)

    if not stat.S_ISDIR(st.st_mode):
        raise PathValidationError(
            f'Provided path is not a directory "{code(path)}"', path=path
        )
