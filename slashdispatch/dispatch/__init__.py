"""Command dispatch engine and per-invocation run state machine."""

from __future__ import annotations

from .observability import DispatchEventLogger, DispatchEventType
from .runner import (
    CommandRun,
    DispatchRequest,
    RunOutcome,
    RunState,
    default_authorizer,
)
from .service import (
    MAX_WORKFLOW_INPUTS,
    CommandDispatcher,
    DispatchResult,
    ReactionResult,
    event_type_for,
    workflow_file_for,
    workflow_inputs_from,
)

__all__ = [
    "MAX_WORKFLOW_INPUTS",
    "CommandDispatcher",
    "CommandRun",
    "DispatchEventLogger",
    "DispatchEventType",
    "DispatchRequest",
    "DispatchResult",
    "ReactionResult",
    "RunOutcome",
    "RunState",
    "default_authorizer",
    "event_type_for",
    "workflow_file_for",
    "workflow_inputs_from",
]
