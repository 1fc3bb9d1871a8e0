"""Typed command and client payload structures.

These structures mirror the JSON produced by the slash command parser. They
are decoded with msgspec so that mistyped fields fail early, and
``ClientPayload`` encodes without its optional members when they are unset.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

from .permissions import Permission

DEFAULT_EVENT_TYPE_SUFFIX = "-command"


class DispatchType(enum.StrEnum):
    """Mechanism used to forward a command to its target repository."""

    REPOSITORY = "repository"
    WORKFLOW = "workflow"


class IssueType(enum.StrEnum):
    """Kinds of discussion a command may be invoked from."""

    ISSUE = "issue"
    PULL_REQUEST = "pull-request"
    BOTH = "both"


class ReactionKind(enum.StrEnum):
    """Reactions GitHub accepts on issue comments."""

    PLUS_ONE = "+1"
    MINUS_ONE = "-1"
    LAUGH = "laugh"
    CONFUSED = "confused"
    HEART = "heart"
    HOORAY = "hooray"
    ROCKET = "rocket"
    EYES = "eyes"


class Command(msgspec.Struct, kw_only=True, frozen=True):
    """A configured slash command and where it should be dispatched.

    Attributes
    ----------
    command : str
        Command identifier, e.g. ``deploy`` for ``/deploy``.
    repository : str
        Target repository in ``owner/name`` format.
    dispatch_type : DispatchType
        Whether to send a repository event or trigger a workflow run.
    event_type_suffix : str
        Appended verbatim to ``command`` to form the event type or workflow
        file name.
    permission : Permission
        Minimum collaborator permission required to run the command. Unknown
        names are rejected when the definition is decoded.
    issue_type : IssueType
        Discussion kinds the command may be invoked from.
    allow_edits : bool
        Whether edited comments may trigger the command.
    static_args : list[str]
        Arguments the parser appends to every invocation.

    """

    command: str
    repository: str
    dispatch_type: DispatchType = DispatchType.REPOSITORY
    event_type_suffix: str = DEFAULT_EVENT_TYPE_SUFFIX
    permission: Permission = Permission.WRITE
    issue_type: IssueType = IssueType.BOTH
    allow_edits: bool = False
    static_args: list[str] = msgspec.field(default_factory=list)


class SlashCommandArgs(msgspec.Struct, kw_only=True):
    """Parsed arguments of a slash command.

    ``named`` keeps the order the parser emitted the arguments in; the
    workflow dispatcher relies on that order when capping inputs.
    """

    all: str = ""
    unnamed: dict[str, str] = msgspec.field(default_factory=dict)
    named: dict[str, str] = msgspec.field(default_factory=dict)


class SlashCommandPayload(msgspec.Struct, kw_only=True):
    """The triggering command and its parsed arguments."""

    command: str
    args: SlashCommandArgs = msgspec.field(default_factory=SlashCommandArgs)


class ClientPayload(msgspec.Struct, kw_only=True, omit_defaults=True):
    """Envelope sent as the dispatch event's client payload.

    Attributes
    ----------
    github : dict[str, Any]
        Context of the triggering run, passed through untouched.
    pull_request : dict[str, Any] | None
        Pull request metadata, present when the command came from a pull
        request discussion.
    slash_command : SlashCommandPayload | None
        The parsed command. Required for workflow dispatches.

    """

    github: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    pull_request: dict[str, typ.Any] | None = None
    slash_command: SlashCommandPayload | None = None

    def with_pull_request(self, pull_request: dict[str, typ.Any]) -> ClientPayload:
        """Return a copy of the payload enriched with pull request data."""
        return msgspec.structs.replace(self, pull_request=pull_request)

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return the payload as JSON-compatible builtins."""
        return msgspec.to_builtins(self)


def decode_command(data: bytes | str) -> Command:
    """Decode a JSON command definition."""
    return msgspec.json.decode(data, type=Command)


def decode_client_payload(data: bytes | str) -> ClientPayload:
    """Decode a JSON client payload."""
    return msgspec.json.decode(data, type=ClientPayload)


__all__ = [
    "DEFAULT_EVENT_TYPE_SUFFIX",
    "ClientPayload",
    "Command",
    "DispatchType",
    "IssueType",
    "ReactionKind",
    "SlashCommandArgs",
    "SlashCommandPayload",
    "decode_client_payload",
    "decode_command",
]
