"""Workflow package: refinement loop, session state and generation controller."""

from workflow.conditions import refinement_direction, route_after_attempt
from workflow.refinement import (
    MAX_REFINEMENT_ATTEMPTS,
    RefinementOutcome,
    RefinementState,
    refine_to_window,
)
from workflow.callbacks import (
    RichStatusCallback,
    StatusCallback,
    safe_status,
)
from workflow.state import ActionResult, SessionInputs, SessionState
from workflow.controller import GenerationController, resolve_api_key

__all__ = [
    "refinement_direction",
    "route_after_attempt",
    "MAX_REFINEMENT_ATTEMPTS",
    "RefinementOutcome",
    "RefinementState",
    "refine_to_window",
    "RichStatusCallback",
    "StatusCallback",
    "safe_status",
    "ActionResult",
    "SessionInputs",
    "SessionState",
    "GenerationController",
    "resolve_api_key",
]
