"""Structured log events for command dispatch runs.

Usage
-----
>>> event_logger = DispatchEventLogger()
>>> event_logger.log_repository_dispatched(
...     command="deploy",
...     repository="acme/widgets",
...     event_type="deploy-command",
... )

"""

from __future__ import annotations

import enum
import typing as typ

from slashdispatch.logging import (
    get_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    from slashdispatch.errors import CommandDispatchError, ReactionFailedError

logger = get_logger(__name__)


class DispatchEventType(enum.StrEnum):
    """Structured log event types for dispatch runs."""

    RUN_STARTED = "dispatch.run.started"
    RUN_REJECTED = "dispatch.run.rejected"
    RUN_COMPLETED = "dispatch.run.completed"
    RUN_FAILED = "dispatch.run.failed"
    REPOSITORY_DISPATCHED = "dispatch.repository.sent"
    WORKFLOW_DISPATCHED = "dispatch.workflow.sent"
    REACTION_FAILED = "dispatch.reaction.failed"


class DispatchEventLogger:
    """Emit structured dispatch events via femtologging.

    Success is logged at INFO, a failed best-effort reaction at WARNING, and a
    failed run at ERROR.
    """

    def log_run_started(self, *, command: str, actor: str, repository: str) -> None:
        """Log receipt of a command invocation."""
        log_info(
            logger,
            "[%s] command=%s actor=%s target=%s",
            DispatchEventType.RUN_STARTED,
            command,
            actor,
            repository,
        )

    def log_run_rejected(
        self,
        *,
        command: str,
        actor: str,
        permission: str,
        required: str,
    ) -> None:
        """Log a command the actor is not allowed to run."""
        log_info(
            logger,
            "[%s] Command '%s' is not configured to allow execution for user "
            "'%s' (permission=%s required=%s).",
            DispatchEventType.RUN_REJECTED,
            command,
            actor,
            permission,
            required,
        )

    def log_run_completed(self, *, command: str, repository: str) -> None:
        """Log a run that reached its final state successfully."""
        log_info(
            logger,
            "[%s] command=%s target=%s",
            DispatchEventType.RUN_COMPLETED,
            command,
            repository,
        )

    def log_run_failed(self, *, command: str, error: CommandDispatchError) -> None:
        """Log a run that terminated in the failed state."""
        log_error(
            logger,
            "[%s] command=%s error_type=%s status_code=%s error=%s",
            DispatchEventType.RUN_FAILED,
            command,
            type(error).__name__,
            error.status_code,
            error,
            exc_info=error,
        )

    def log_repository_dispatched(
        self, *, command: str, repository: str, event_type: str
    ) -> None:
        """Log a repository dispatch event accepted by the remote API."""
        log_info(
            logger,
            "[%s] Command '%s' dispatched to '%s' with event type '%s'.",
            DispatchEventType.REPOSITORY_DISPATCHED,
            command,
            repository,
            event_type,
        )

    def log_workflow_dispatched(
        self, *, command: str, repository: str, workflow: str
    ) -> None:
        """Log a workflow run triggered on the remote repository."""
        log_info(
            logger,
            "[%s] Command '%s' dispatched to workflow '%s' in '%s'.",
            DispatchEventType.WORKFLOW_DISPATCHED,
            command,
            workflow,
            repository,
        )

    def log_reaction_failed(
        self, *, comment_id: int, error: ReactionFailedError
    ) -> None:
        """Log a reaction that could not be added; the run is unaffected."""
        log_debug(logger, "%s", error)
        log_warning(
            logger,
            "[%s] Failed to set reaction on comment ID %d.",
            DispatchEventType.REACTION_FAILED,
            comment_id,
        )
