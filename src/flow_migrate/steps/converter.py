"""
Interactive converter driver.

Runs the Flow-to-TypeScript converter as a child process and plays the part of
the operator: every time the converter prints something that matches the
prompt table, the matching answer is typed into its stdin.

Key behaviors:
- Output is read in chunks; unanswered text is buffered so a prompt split
  across two reads still matches
- At most one answer per read, first matching rule wins
- stderr is drained in the background in chunks and logged at DEBUG
- No output for ``idle_timeout`` seconds, or no exit within ``timeout``
  seconds, means the converter is stuck on a prompt we do not know; the
  child is killed and PromptTimeoutError raised
"""

from __future__ import annotations

import asyncio
import codecs
import shlex
from typing import List, Optional

from flow_migrate.errors import ConverterExitError, PromptTimeoutError, SpawnError
from flow_migrate.observability import get_logger
from flow_migrate.steps.prerequisites import CONVERTER
from flow_migrate.steps.process import NEW_SESSION, kill_process_tree
from flow_migrate.steps.prompts import DEFAULT_PROMPT_TABLE, PromptTable

logger = get_logger(__name__)

CONVERTER_FLAGS = ["--react-namespace", "false"]

# Unanswered output kept for matching and for the timeout message
MAX_PENDING_CHARS = 4096


def build_converter_command(path: str) -> str:
    """Shell command line that converts the package at path."""
    return " ".join([CONVERTER, shlex.quote(path), *CONVERTER_FLAGS])


class InteractiveProcessDriver:
    """
    Drive an interactive shell command to completion.

    Only prompts found in the table are answered. The driver resolves when the
    child closes its output, whatever its exit status, unless ``strict_exit``
    is set.
    """

    def __init__(
        self,
        command: str,
        prompts: PromptTable = DEFAULT_PROMPT_TABLE,
        idle_timeout: float = 300.0,
        timeout: float = 1800.0,
        strict_exit: bool = False,
        cwd: Optional[str] = None,
        chunk_size: int = 4096,
    ):
        """
        Initialize driver.

        Args:
            command: Shell command line to run
            prompts: Prompt table consulted for every chunk of output
            idle_timeout: Seconds to wait for output before giving up
            timeout: Total seconds the child may run
            strict_exit: If True, a non-zero exit status raises ConverterExitError
            cwd: Working directory for the child
            chunk_size: Maximum bytes read from stdout/stderr at a time
        """
        self.command = command
        self.prompts = prompts
        self.idle_timeout = idle_timeout
        self.timeout = timeout
        self.strict_exit = strict_exit
        self.cwd = cwd
        self.chunk_size = chunk_size

        # Answers written to the child, in order
        self.answers: List[str] = []
        self._pending = ""

    async def run(self) -> int:
        """
        Spawn the command and answer its prompts until it exits.

        Returns:
            The child's exit status

        Raises:
            SpawnError: If the child cannot be started
            PromptTimeoutError: If the child goes quiet for longer than
                idle_timeout or runs longer than timeout
            ConverterExitError: If strict_exit is set and the child exits non-zero
        """
        try:
            proc = await asyncio.create_subprocess_shell(
                self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
                start_new_session=NEW_SESSION,
            )
        except OSError as e:
            raise SpawnError(f"Unable to start `{self.command}`: {e}")

        logger.info("Started converter (pid %s): %s", proc.pid, self.command)
        stderr_task = asyncio.create_task(self._drain_stderr(proc))

        try:
            returncode = await asyncio.wait_for(self._converse(proc), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise PromptTimeoutError(
                f"Converter did not finish within {self.timeout:g}s; "
                f"prompt not recognized or timed out. Last output: {self._tail()!r}",
                pending_output=self._pending,
            )
        finally:
            if proc.returncode is None:
                kill_process_tree(proc)
                await proc.wait()
            await stderr_task

        if returncode != 0:
            logger.warning("Converter exited with status %s", returncode)
            if self.strict_exit:
                raise ConverterExitError(
                    f"Converter exited with status {returncode}", returncode=returncode
                )
        else:
            logger.info("Converter finished")

        return returncode

    async def _converse(self, proc: asyncio.subprocess.Process) -> int:
        await self._answer_prompts(proc)
        return await proc.wait()

    def _tail(self) -> str:
        return self._pending.strip()[-200:]

    async def _answer_prompts(self, proc: asyncio.subprocess.Process) -> None:
        """Read stdout until EOF, answering recognized prompts."""
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

        while True:
            try:
                chunk = await asyncio.wait_for(
                    proc.stdout.read(self.chunk_size), timeout=self.idle_timeout
                )
            except asyncio.TimeoutError:
                raise PromptTimeoutError(
                    f"Converter produced no output for {self.idle_timeout:g}s; "
                    f"prompt not recognized or timed out. Last output: {self._tail()!r}",
                    pending_output=self._pending,
                )

            if not chunk:
                return

            self._pending += decoder.decode(chunk)
            answer = self.prompts.match(self._pending)
            if answer is None:
                self._pending = self._pending[-MAX_PENDING_CHARS:]
                continue

            logger.debug("Answering %r to prompt: %r", answer, self._tail())
            self._write_answer(proc, answer)
            self._pending = ""

    def _write_answer(self, proc: asyncio.subprocess.Process, answer: str) -> None:
        """Type an answer into the child's stdin without waiting for it to drain."""
        if proc.stdin is None or proc.stdin.is_closing():
            logger.warning("Converter stdin is closed, dropping answer %r", answer)
            return
        proc.stdin.write(f"{answer}\n".encode("utf-8"))
        self.answers.append(answer)

    async def _drain_stderr(self, proc: asyncio.subprocess.Process) -> None:
        # Chunked reads: progress bars rewrite one line with \r and never end it
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await proc.stderr.read(self.chunk_size)
            if not chunk:
                return
            logger.debug("converter stderr: %s", decoder.decode(chunk).rstrip())


async def convert_package(
    path: str,
    prompts: PromptTable = DEFAULT_PROMPT_TABLE,
    idle_timeout: float = 300.0,
    timeout: float = 1800.0,
    strict_exit: bool = False,
) -> int:
    """Generate tsconfig and convert the package's Flow files to TypeScript."""
    driver = InteractiveProcessDriver(
        build_converter_command(path),
        prompts=prompts,
        idle_timeout=idle_timeout,
        timeout=timeout,
        strict_exit=strict_exit,
    )
    return await driver.run()
