"""Command dispatch engine.

``CommandDispatcher`` wraps a :class:`~slashdispatch.github.GitHubDispatchClient`
and implements the remote steps of a dispatch run: permission lookup, pull
request enrichment, the repository-event and workflow-run dispatch strategies,
and the best-effort reaction on the triggering comment.

Remote failures are re-raised as the typed errors in
:mod:`slashdispatch.errors`, chained to the original API error.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import itertools
import typing as typ

from slashdispatch.commands.models import DispatchType, ReactionKind
from slashdispatch.common.slug import parse_repo_slug
from slashdispatch.errors import (
    AuthorizationQueryFailedError,
    DispatchFailedError,
    EnrichmentFailedError,
    ReactionFailedError,
)
from slashdispatch.github.errors import GitHubAPIError, GitHubResponseShapeError

from .observability import DispatchEventLogger

K = typ.TypeVar("K")
V = typ.TypeVar("V")

if typ.TYPE_CHECKING:
    from slashdispatch.commands.models import ClientPayload, Command
    from slashdispatch.common.slug import RepositoryReference
    from slashdispatch.github.client import GitHubDispatchClient

# The workflow_dispatch API rejects requests with more than ten inputs.
MAX_WORKFLOW_INPUTS = 10
REF_ARGUMENT = "ref"
WORKFLOW_FILE_EXTENSION = ".yml"

_REMOTE_ERRORS = (GitHubAPIError, GitHubResponseShapeError)


def event_type_for(cmd: Command) -> str:
    """Return the event type identifier for ``cmd``.

    The suffix is appended without a separator.

    Examples
    --------
    >>> from slashdispatch.commands import Command
    >>> event_type_for(
    ...     Command(command="deploy", repository="a/b", event_type_suffix="-dispatch")
    ... )
    'deploy-dispatch'

    """
    return f"{cmd.command}{cmd.event_type_suffix}"


def workflow_file_for(cmd: Command) -> str:
    """Return the workflow file name triggered for ``cmd``."""
    return f"{event_type_for(cmd)}{WORKFLOW_FILE_EXTENSION}"


def take_first(
    items: cabc.Iterable[tuple[K, V]], limit: int
) -> list[tuple[K, V]]:
    """Return the first ``limit`` pairs of ``items`` in iteration order."""
    return list(itertools.islice(items, limit))


def workflow_inputs_from(
    named: cabc.Mapping[str, str], *, limit: int = MAX_WORKFLOW_INPUTS
) -> dict[str, str]:
    """Build workflow inputs from named slash command arguments.

    ``ref`` is excluded because it selects the ref to run on. Of the remaining
    arguments only the first ``limit`` in insertion order are kept; any beyond
    that are dropped without warning.
    """
    candidates = ((key, value) for key, value in named.items() if key != REF_ARGUMENT)
    return dict(take_first(candidates, limit))


def ref_override_from(named: cabc.Mapping[str, str]) -> str | None:
    """Return the ``ref`` argument when present and non-empty."""
    return named.get(REF_ARGUMENT) or None


@dataclasses.dataclass(frozen=True, slots=True)
class ReactionResult:
    """Outcome of a best-effort reaction on the triggering comment."""

    comment_id: int
    reaction: ReactionKind
    error: ReactionFailedError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the reaction was added."""
        return self.error is None


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchResult:
    """Describes a dispatch accepted by the remote API.

    ``event_type`` is set for repository dispatches; ``workflow``, ``ref`` and
    ``inputs`` for workflow dispatches.
    """

    command: str
    repository: str
    dispatch_type: DispatchType
    event_type: str | None = None
    workflow: str | None = None
    ref: str | None = None
    inputs: dict[str, str] = dataclasses.field(default_factory=dict)


class CommandDispatcher:
    """Perform the remote steps of a command dispatch.

    Parameters
    ----------
    client
        GitHub client used for every remote call.
    event_logger
        Optional structured event logger; a default instance is created when
        omitted.

    """

    def __init__(
        self,
        client: GitHubDispatchClient,
        *,
        event_logger: DispatchEventLogger | None = None,
    ) -> None:
        """Store the client and event logger."""
        self._client = client
        self._events = event_logger or DispatchEventLogger()

    async def get_actor_permission(self, repo: RepositoryReference, actor: str) -> str:
        """Return ``actor``'s collaborator permission level on ``repo``.

        Raises
        ------
        AuthorizationQueryFailedError
            If the lookup fails.

        """
        try:
            return await self._client.get_collaborator_permission(repo, actor)
        except _REMOTE_ERRORS as exc:
            raise AuthorizationQueryFailedError.for_actor(
                actor, repo.slug, exc
            ) from exc

    async def try_add_reaction(
        self,
        repo: RepositoryReference,
        comment_id: int,
        reaction: ReactionKind,
    ) -> ReactionResult:
        """Add ``reaction`` to a comment without failing the run.

        Remote failures are logged as a warning and returned in the result's
        ``error`` field; they are never raised.
        """
        try:
            await self._client.create_comment_reaction(repo, comment_id, reaction)
        except _REMOTE_ERRORS as exc:
            error = ReactionFailedError.for_comment(comment_id, exc)
            self._events.log_reaction_failed(comment_id=comment_id, error=error)
            return ReactionResult(comment_id=comment_id, reaction=reaction, error=error)
        return ReactionResult(comment_id=comment_id, reaction=reaction)

    async def get_pull(
        self, repo: RepositoryReference, pull_number: int
    ) -> dict[str, typ.Any]:
        """Return pull request metadata used to enrich the client payload.

        Raises
        ------
        EnrichmentFailedError
            If the pull request cannot be fetched.

        """
        try:
            return await self._client.get_pull_request(repo, pull_number)
        except _REMOTE_ERRORS as exc:
            raise EnrichmentFailedError.for_pull(repo.slug, pull_number, exc) from exc

    async def create_dispatch(
        self, cmd: Command, client_payload: ClientPayload
    ) -> DispatchResult:
        """Dispatch ``cmd`` using the strategy its dispatch type selects."""
        if cmd.dispatch_type == DispatchType.REPOSITORY:
            return await self.create_repository_dispatch(cmd, client_payload)
        return await self.create_workflow_dispatch(cmd, client_payload)

    async def create_repository_dispatch(
        self, cmd: Command, client_payload: ClientPayload
    ) -> DispatchResult:
        """Send a repository dispatch event carrying the full client payload.

        Raises
        ------
        MalformedRepositoryReferenceError
            If ``cmd.repository`` is not an ``owner/name`` slug.
        DispatchFailedError
            If the remote call fails.

        """
        repo = parse_repo_slug(cmd.repository)
        event_type = event_type_for(cmd)
        try:
            await self._client.create_repository_dispatch(
                repo,
                event_type=event_type,
                client_payload=client_payload.to_builtins(),
            )
        except _REMOTE_ERRORS as exc:
            raise DispatchFailedError.for_command(
                cmd.command, cmd.repository, exc
            ) from exc

        self._events.log_repository_dispatched(
            command=cmd.command, repository=cmd.repository, event_type=event_type
        )
        return DispatchResult(
            command=cmd.command,
            repository=cmd.repository,
            dispatch_type=DispatchType.REPOSITORY,
            event_type=event_type,
        )

    async def create_workflow_dispatch(
        self, cmd: Command, client_payload: ClientPayload
    ) -> DispatchResult:
        """Trigger the command's workflow on the resolved ref.

        The ref comes from a non-empty ``ref`` named argument, or else from the
        target repository's default branch. Named arguments other than ``ref``
        become workflow inputs, capped at :data:`MAX_WORKFLOW_INPUTS`.

        Raises
        ------
        MalformedRepositoryReferenceError
            If ``cmd.repository`` is not an ``owner/name`` slug.
        DispatchFailedError
            If the payload has no slash command, or if ref resolution or the
            dispatch itself fails.

        """
        repo = parse_repo_slug(cmd.repository)
        slash_command = client_payload.slash_command
        if slash_command is None:
            raise DispatchFailedError.missing_slash_command(cmd.command)

        workflow = workflow_file_for(cmd)
        named = slash_command.args.named
        inputs = workflow_inputs_from(named)
        try:
            ref = ref_override_from(named) or await self._get_default_branch(repo)
            await self._client.create_workflow_dispatch(
                repo, workflow_id=workflow, ref=ref, inputs=inputs
            )
        except _REMOTE_ERRORS as exc:
            raise DispatchFailedError.for_command(
                cmd.command, cmd.repository, exc
            ) from exc

        self._events.log_workflow_dispatched(
            command=cmd.command, repository=cmd.repository, workflow=workflow
        )
        return DispatchResult(
            command=cmd.command,
            repository=cmd.repository,
            dispatch_type=DispatchType.WORKFLOW,
            workflow=workflow,
            ref=ref,
            inputs=inputs,
        )

    async def _get_default_branch(self, repo: RepositoryReference) -> str:
        details = await self._client.get_repository(repo)
        return details.default_branch


__all__ = [
    "MAX_WORKFLOW_INPUTS",
    "REF_ARGUMENT",
    "CommandDispatcher",
    "DispatchResult",
    "ReactionResult",
    "event_type_for",
    "ref_override_from",
    "take_first",
    "workflow_file_for",
    "workflow_inputs_from",
]
