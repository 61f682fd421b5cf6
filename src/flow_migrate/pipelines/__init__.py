"""
Pipelines Package - sequential step execution.

This package provides:
- Step, StepResult, PipelineResult models
- PipelineRunner with console/null reporters
- build_migration_pipeline, the fixed Flow-to-TypeScript step list
"""

from .models import (
    PipelineResult,
    Step,
    StepResult,
    StepStatus,
)
from .runner import (
    ConsoleReporter,
    NullReporter,
    PipelineRunner,
    Reporter,
)
from .migration import build_migration_pipeline

__all__ = [
    # Models
    "PipelineResult",
    "Step",
    "StepResult",
    "StepStatus",
    # Runner
    "ConsoleReporter",
    "NullReporter",
    "PipelineRunner",
    "Reporter",
    # Migration
    "build_migration_pipeline",
]
