"""Observability package."""
from flow_migrate.observability.logging import (
    get_logger,
    setup_logging,
    with_step_context,
)

__all__ = ["get_logger", "setup_logging", "with_step_context"]
