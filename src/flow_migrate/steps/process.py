"""Child process helpers shared by the converter and package manager steps."""

import asyncio
import os
import signal

from flow_migrate.observability import get_logger

logger = get_logger(__name__)

# Shell commands run in their own session so the whole tree can be killed
NEW_SESSION = os.name == "posix"


def kill_process_tree(proc: asyncio.subprocess.Process) -> None:
    """Kill a shell-started child and, on POSIX, everything it spawned."""
    logger.warning("Killing child process (pid %s)", proc.pid)
    try:
        if NEW_SESSION:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass
