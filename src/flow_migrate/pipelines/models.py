"""
Pipeline Models - Pydantic models for sequential step execution.

Defines:
- Step: Named unit of work (title + async callable)
- StepResult: Per-step execution result
- PipelineResult: Outcome of a whole run
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StepStatus(str, Enum):
    """Status of a pipeline step."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class Step(BaseModel):
    """
    A single step in the pipeline.

    ``run`` returns on success and raises on failure; whatever it returns is
    ignored.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str = Field(..., min_length=1, description="Human-readable step title")
    run: Callable[[], Awaitable[object]] = Field(..., description="Coroutine function doing the work")


class StepResult(BaseModel):
    """Result of a single step execution."""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., description="Title of the step")
    status: StepStatus = Field(..., description="Execution status")
    started_at: Optional[datetime] = Field(None, description="When step started")
    completed_at: Optional[datetime] = Field(None, description="When step completed")
    duration_ms: int = Field(0, description="Execution duration in milliseconds")
    error: Optional[str] = Field(None, description="Failure message")
    error_type: Optional[str] = Field(None, description="Exception class name of the failure")


class PipelineResult(BaseModel):
    """Complete result of a pipeline run."""
    model_config = ConfigDict(extra="forbid")

    status: StepStatus = Field(..., description="Overall pipeline status")
    started_at: datetime = Field(..., description="When pipeline started")
    completed_at: Optional[datetime] = Field(None, description="When pipeline completed")
    duration_ms: int = Field(0, description="Total execution duration")
    steps: List[StepResult] = Field(default_factory=list, description="Per-step results")
    error: Optional[str] = Field(None, description="Message of the step that aborted the run")

    def is_success(self) -> bool:
        """Check if every step completed."""
        return self.status == StepStatus.COMPLETED

    def failed_step(self) -> Optional[StepResult]:
        """The step that aborted the run, if any."""
        for step in self.steps:
            if step.status == StepStatus.FAILED:
                return step
        return None
