"""Per-invocation state machine for a single slash command.

A run moves through ``received -> authorizing -> enriching -> routing ->
{repository_dispatching | workflow_dispatching} -> acknowledging -> done``.
An actor without sufficient permission ends the run in ``rejected``; any typed
dispatch error ends it in ``failed`` and is re-raised to the caller. Remote
calls are issued strictly in that order, and a cancelled task never issues the
calls that follow the await it was cancelled at.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import enum
import typing as typ

from slashdispatch.commands.models import DispatchType, ReactionKind
from slashdispatch.commands.permissions import actor_has_permission
from slashdispatch.common.slug import parse_repo_slug
from slashdispatch.errors import CommandDispatchError

from .observability import DispatchEventLogger

if typ.TYPE_CHECKING:
    from slashdispatch.commands.models import ClientPayload, Command
    from slashdispatch.common.slug import RepositoryReference

    from .service import CommandDispatcher, DispatchResult, ReactionResult


class RunState(enum.StrEnum):
    """States of a single command dispatch run."""

    RECEIVED = "received"
    AUTHORIZING = "authorizing"
    REJECTED = "rejected"
    ENRICHING = "enriching"
    ROUTING = "routing"
    REPOSITORY_DISPATCHING = "repository_dispatching"
    WORKFLOW_DISPATCHING = "workflow_dispatching"
    ACKNOWLEDGING = "acknowledging"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RunState.DONE, RunState.REJECTED, RunState.FAILED})

Authorizer = cabc.Callable[["Command", str], bool]


def default_authorizer(command: Command, permission: str) -> bool:
    """Allow actors whose permission meets the command's required level."""
    return actor_has_permission(permission, command.permission)


def dispatch_state_for(command: Command) -> RunState:
    """Return the dispatching state selected by ``command.dispatch_type``."""
    if command.dispatch_type == DispatchType.REPOSITORY:
        return RunState.REPOSITORY_DISPATCHING
    return RunState.WORKFLOW_DISPATCHING


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchRequest:
    """Everything one command invocation needs.

    Attributes
    ----------
    command
        The command to dispatch.
    payload
        Client payload assembled by the caller.
    actor
        Login of the user who posted the command.
    source_repository
        ``owner/name`` of the repository the command was posted in. Permission
        lookup, pull request enrichment and the reaction all target it.
    comment_id
        Triggering comment; no reaction is attempted when ``None``.
    pull_number
        Pull request to enrich the payload with; skipped when ``None``.
    reaction
        Reaction added to the comment once the dispatch succeeded.

    """

    command: Command
    payload: ClientPayload
    actor: str
    source_repository: str
    comment_id: int | None = None
    pull_number: int | None = None
    reaction: ReactionKind = ReactionKind.ROCKET


@dataclasses.dataclass(frozen=True, slots=True)
class RunOutcome:
    """Final state of a run that did not fail."""

    state: RunState
    permission: str
    dispatch: DispatchResult | None = None
    reaction: ReactionResult | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the command was dispatched."""
        return self.state is RunState.DONE


class CommandRun:
    """Drive one :class:`DispatchRequest` through the run states.

    Parameters
    ----------
    dispatcher
        Engine performing the remote calls.
    request
        The invocation to run.
    authorize
        Policy deciding whether an actor's permission level may run the
        command. Defaults to :func:`default_authorizer`.
    event_logger
        Optional structured event logger.

    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        request: DispatchRequest,
        *,
        authorize: Authorizer = default_authorizer,
        event_logger: DispatchEventLogger | None = None,
    ) -> None:
        """Prepare a run in the ``received`` state."""
        self._dispatcher = dispatcher
        self._request = request
        self._authorize = authorize
        self._events = event_logger or DispatchEventLogger()
        self._history: list[RunState] = [RunState.RECEIVED]

    @property
    def state(self) -> RunState:
        """Return the current state."""
        return self._history[-1]

    @property
    def history(self) -> tuple[RunState, ...]:
        """Return every state the run has entered, in order."""
        return tuple(self._history)

    def _enter(self, state: RunState) -> None:
        self._history.append(state)

    async def execute(self) -> RunOutcome:
        """Run the command to a terminal state.

        Returns
        -------
        RunOutcome
            The ``done`` or ``rejected`` outcome.

        Raises
        ------
        CommandDispatchError
            Any failure other than a reaction failure, after the run has
            entered ``failed``.
        RuntimeError
            If the run was already executed.

        """
        if self.state is not RunState.RECEIVED:
            msg = f"command run already executed (state={self.state})"
            raise RuntimeError(msg)

        command = self._request.command
        self._events.log_run_started(
            command=command.command,
            actor=self._request.actor,
            repository=command.repository,
        )
        try:
            outcome = await self._run()
        except CommandDispatchError as exc:
            self._enter(RunState.FAILED)
            self._events.log_run_failed(command=command.command, error=exc)
            raise

        if outcome.succeeded:
            self._events.log_run_completed(
                command=command.command, repository=command.repository
            )
        return outcome

    async def _run(self) -> RunOutcome:
        request = self._request
        command = request.command
        source = parse_repo_slug(request.source_repository)

        self._enter(RunState.AUTHORIZING)
        permission = await self._dispatcher.get_actor_permission(source, request.actor)
        if not self._authorize(command, permission):
            self._enter(RunState.REJECTED)
            self._events.log_run_rejected(
                command=command.command,
                actor=request.actor,
                permission=permission,
                required=command.permission,
            )
            return RunOutcome(state=RunState.REJECTED, permission=permission)

        self._enter(RunState.ENRICHING)
        payload = await self._enrich(source, request.payload)

        self._enter(RunState.ROUTING)
        self._enter(dispatch_state_for(command))
        dispatch = await self._dispatcher.create_dispatch(command, payload)

        self._enter(RunState.ACKNOWLEDGING)
        reaction = None
        if request.comment_id is not None:
            # A failed reaction is reported in the result and does not fail the run.
            reaction = await self._dispatcher.try_add_reaction(
                source, request.comment_id, request.reaction
            )

        self._enter(RunState.DONE)
        return RunOutcome(
            state=RunState.DONE,
            permission=permission,
            dispatch=dispatch,
            reaction=reaction,
        )

    async def _enrich(
        self, source: RepositoryReference, payload: ClientPayload
    ) -> ClientPayload:
        if self._request.pull_number is None:
            return payload
        pull_request = await self._dispatcher.get_pull(
            source, self._request.pull_number
        )
        return payload.with_pull_request(pull_request)


__all__ = [
    "TERMINAL_STATES",
    "Authorizer",
    "CommandRun",
    "DispatchRequest",
    "RunOutcome",
    "RunState",
    "default_authorizer",
    "dispatch_state_for",
]
