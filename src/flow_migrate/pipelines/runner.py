"""
Pipeline Runner - Execute steps strictly in declaration order.

Key behaviors:
- One step at a time, never reordered
- Reports start/success/failure for each step
- First failure aborts the run; later steps are recorded as skipped
- Nothing is rolled back: completed steps keep their side effects
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

import click

from flow_migrate.observability import get_logger
from .models import PipelineResult, Step, StepResult, StepStatus

logger = get_logger(__name__)


class Reporter(Protocol):
    """Progress hooks called by the runner."""

    def start(self, title: str) -> None: ...

    def succeed(self, title: str) -> None: ...

    def fail(self, title: str) -> None: ...


class ConsoleReporter:
    """
    Print one status line per step to stdout.

    The pending line is left open and rewritten in place with the outcome.
    """

    def start(self, title: str) -> None:
        click.echo(f"- {title}", nl=False)

    def succeed(self, title: str) -> None:
        click.echo("\r" + click.style("✔ ", fg="green") + title)

    def fail(self, title: str) -> None:
        click.echo("\r" + click.style("✖ ", fg="red") + title)


class NullReporter:
    """Reporter that prints nothing."""

    def start(self, title: str) -> None:
        pass

    def succeed(self, title: str) -> None:
        pass

    def fail(self, title: str) -> None:
        pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PipelineRunner:
    """Run an ordered list of steps, aborting on the first failure."""

    def __init__(self, reporter: Optional[Reporter] = None):
        """
        Initialize runner.

        Args:
            reporter: Progress reporter; defaults to ConsoleReporter
        """
        self.reporter = reporter or ConsoleReporter()

    async def run(self, steps: Sequence[Step]) -> PipelineResult:
        """
        Execute steps in order.

        Args:
            steps: Steps to run; insertion order is execution order

        Returns:
            PipelineResult with one StepResult per declared step
        """
        started_at = _now()
        start_time = time.monotonic()

        step_results: List[StepResult] = []
        overall_status = StepStatus.COMPLETED
        error: Optional[str] = None

        for step in steps:
            if overall_status == StepStatus.FAILED:
                step_results.append(
                    StepResult(title=step.title, status=StepStatus.SKIPPED)
                )
                continue

            result = await self._execute_step(step)
            step_results.append(result)

            if result.status == StepStatus.FAILED:
                overall_status = StepStatus.FAILED
                error = result.error

        return PipelineResult(
            status=overall_status,
            started_at=started_at,
            completed_at=_now(),
            duration_ms=int((time.monotonic() - start_time) * 1000),
            steps=step_results,
            error=error,
        )

    async def _execute_step(self, step: Step) -> StepResult:
        """Execute a single step, turning any exception into a failed result."""
        started_at = _now()
        start_time = time.monotonic()
        log = get_logger(__name__, step=step.title)

        self.reporter.start(step.title)
        log.info("Step started: %s", step.title)

        try:
            await step.run()
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            self.reporter.fail(step.title)
            log.error("Step failed: %s: %s", step.title, e)
            return StepResult(
                title=step.title,
                status=StepStatus.FAILED,
                started_at=started_at,
                completed_at=_now(),
                duration_ms=duration_ms,
                error=str(e),
                error_type=type(e).__name__,
            )

        duration_ms = int((time.monotonic() - start_time) * 1000)
        self.reporter.succeed(step.title)
        log.info("Step completed in %dms: %s", duration_ms, step.title)
        return StepResult(
            title=step.title,
            status=StepStatus.COMPLETED,
            started_at=started_at,
            completed_at=_now(),
            duration_ms=duration_ms,
        )
