"""Error taxonomy for command dispatch runs.

Every failure except a reaction failure aborts the run and surfaces to the
caller. ``ReactionFailedError`` is only ever returned inside a
``ReactionResult``; it is never raised past the reaction boundary.
"""

from __future__ import annotations


class CommandDispatchError(Exception):
    """Base exception for all command dispatch errors.

    Attributes
    ----------
    status_code
        HTTP status code of the underlying API failure, when there was one.

    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)


def _status_of(cause: BaseException) -> int | None:
    status = getattr(cause, "status_code", None)
    return status if isinstance(status, int) else None


class MalformedRepositoryReferenceError(CommandDispatchError, ValueError):
    """Raised when a repository string is not in ``owner/name`` format."""

    @classmethod
    def for_slug(cls, slug: str) -> MalformedRepositoryReferenceError:
        """Return an error describing the rejected slug."""
        return cls(f"Invalid repository slug: expected 'owner/name', got {slug!r}")


class AuthorizationQueryFailedError(CommandDispatchError):
    """Raised when the actor's permission level cannot be looked up."""

    @classmethod
    def for_actor(
        cls, actor: str, repository: str, cause: BaseException
    ) -> AuthorizationQueryFailedError:
        """Return an error for a failed collaborator permission lookup."""
        return cls(
            f"Failed to query permission for '{actor}' on '{repository}': {cause}",
            status_code=_status_of(cause),
        )


class EnrichmentFailedError(CommandDispatchError):
    """Raised when pull request metadata cannot be fetched."""

    @classmethod
    def for_pull(
        cls, repository: str, pull_number: int, cause: BaseException
    ) -> EnrichmentFailedError:
        """Return an error for a failed pull request fetch."""
        return cls(
            f"Failed to fetch pull request #{pull_number} in '{repository}': {cause}",
            status_code=_status_of(cause),
        )


class DispatchFailedError(CommandDispatchError):
    """Raised when either dispatch strategy's remote call fails."""

    @classmethod
    def for_command(
        cls, command: str, repository: str, cause: BaseException
    ) -> DispatchFailedError:
        """Return an error for a failed repository or workflow dispatch."""
        return cls(
            f"Failed to dispatch command '{command}' to '{repository}': {cause}",
            status_code=_status_of(cause),
        )

    @classmethod
    def missing_slash_command(cls, command: str) -> DispatchFailedError:
        """Return an error for a workflow dispatch without slash command args."""
        return cls(
            f"Workflow dispatch for command '{command}' requires a slash_command "
            "in the client payload"
        )


class ReactionFailedError(CommandDispatchError):
    """Describes a failed best-effort reaction on the triggering comment."""

    @classmethod
    def for_comment(
        cls, comment_id: int, cause: BaseException
    ) -> ReactionFailedError:
        """Return an error for a reaction that could not be created."""
        return cls(
            f"Failed to set reaction on comment ID {comment_id}: {cause}",
            status_code=_status_of(cause),
        )


__all__ = [
    "AuthorizationQueryFailedError",
    "CommandDispatchError",
    "DispatchFailedError",
    "EnrichmentFailedError",
    "MalformedRepositoryReferenceError",
    "ReactionFailedError",
]
