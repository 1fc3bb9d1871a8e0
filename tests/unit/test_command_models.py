"""Unit tests for command and client payload structures."""

from __future__ import annotations

import msgspec
import pytest

from slashdispatch.commands import (
    ClientPayload,
    DispatchType,
    IssueType,
    Permission,
    SlashCommandArgs,
    SlashCommandPayload,
)
from slashdispatch.commands.models import decode_client_payload, decode_command


def test_decode_command_applies_defaults() -> None:
    """Only command and repository are required."""
    command = decode_command(b'{"command": "deploy", "repository": "acme/widgets"}')

    assert command.dispatch_type is DispatchType.REPOSITORY
    assert command.event_type_suffix == "-command"
    assert command.permission is Permission.WRITE
    assert command.issue_type is IssueType.BOTH
    assert command.allow_edits is False
    assert command.static_args == []


def test_decode_command_reads_workflow_dispatch_type() -> None:
    """Workflow commands decode with their suffix untouched."""
    command = decode_command(
        '{"command": "build", "repository": "acme/widgets",'
        ' "dispatch_type": "workflow", "event_type_suffix": "-ci"}'
    )

    assert command.dispatch_type is DispatchType.WORKFLOW
    assert command.event_type_suffix == "-ci"


def test_decode_command_rejects_unknown_dispatch_type() -> None:
    """Dispatch types outside the enum fail validation."""
    with pytest.raises(msgspec.ValidationError):
        decode_command(
            '{"command": "build", "repository": "a/b", "dispatch_type": "webhook"}'
        )


def test_decode_command_reads_required_permission() -> None:
    """Known permission names decode to the matching member."""
    command = decode_command(
        '{"command": "deploy", "repository": "a/b", "permission": "maintain"}'
    )

    assert command.permission is Permission.MAINTAIN


@pytest.mark.parametrize("permission", ["admn", "Write", ""])
def test_decode_command_rejects_unknown_permission(permission: str) -> None:
    """A misspelled required permission fails validation."""
    data = msgspec.json.encode(
        {"command": "deploy", "repository": "a/b", "permission": permission}
    )

    with pytest.raises(msgspec.ValidationError):
        decode_command(data)


def test_decode_client_payload_preserves_named_argument_order() -> None:
    """Named arguments keep the order the parser emitted them in."""
    payload = decode_client_payload(
        '{"github": {"actor": "octocat"},'
        ' "slash_command": {"command": "build", "args": {"all": "z=1 a=2 ref=x",'
        ' "unnamed": {}, "named": {"z": "1", "a": "2", "ref": "x"}}}}'
    )

    assert payload.slash_command is not None
    assert list(payload.slash_command.args.named) == ["z", "a", "ref"]
    assert payload.pull_request is None


def test_client_payload_omits_unset_optional_fields() -> None:
    """Absent pull request and slash command data are not encoded."""
    payload = ClientPayload(github={"actor": "octocat"})

    assert payload.to_builtins() == {"github": {"actor": "octocat"}}


def test_with_pull_request_returns_enriched_copy() -> None:
    """Enrichment leaves the original payload untouched."""
    original = ClientPayload(
        github={"actor": "octocat"},
        slash_command=SlashCommandPayload(
            command="deploy", args=SlashCommandArgs(named={"env": "prod"})
        ),
    )

    enriched = original.with_pull_request({"number": 7})

    assert original.pull_request is None
    assert enriched.to_builtins() == {
        "github": {"actor": "octocat"},
        "pull_request": {"number": 7},
        "slash_command": {
            "command": "deploy",
            "args": {"all": "", "unnamed": {}, "named": {"env": "prod"}},
        },
    }
