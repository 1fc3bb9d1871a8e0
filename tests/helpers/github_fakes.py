"""Deterministic GitHubDispatchClient implementation for tests.

``FakeGitHubClient`` records every remote call in order so tests can assert
which operations ran, with which arguments, and that nothing else did.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from slashdispatch.commands import (
    ClientPayload,
    Command,
    DispatchType,
    SlashCommandArgs,
    SlashCommandPayload,
)
from slashdispatch.github.errors import GitHubAPIError
from slashdispatch.github.models import RepositoryDetails

if typ.TYPE_CHECKING:
    from slashdispatch.commands.permissions import Permission
    from slashdispatch.common.slug import RepositoryReference


@dataclasses.dataclass(frozen=True, slots=True)
class RecordedCall:
    """One remote call made against the fake client."""

    operation: str
    repository: str
    arguments: dict[str, typ.Any]


class FakeGitHubClient:
    """In-memory GitHub client with configurable responses and failures."""

    def __init__(
        self,
        *,
        permission: str = "write",
        default_branch: str = "main",
        pull_request: dict[str, typ.Any] | None = None,
        failures: dict[str, GitHubAPIError] | None = None,
    ) -> None:
        """Store canned responses; ``failures`` maps operation to error."""
        self.permission = permission
        self.default_branch = default_branch
        self.pull_request = pull_request or {"number": 7, "title": "Add widgets"}
        self.failures = failures or {}
        self.calls: list[RecordedCall] = []
        self.closed = False

    def _record(
        self, operation: str, repo: RepositoryReference, **arguments: typ.Any
    ) -> None:
        self.calls.append(RecordedCall(operation, repo.slug, arguments))
        if operation in self.failures:
            raise self.failures[operation]

    def operations(self) -> list[str]:
        """Return the names of the recorded operations, in call order."""
        return [call.operation for call in self.calls]

    def calls_to(self, operation: str) -> list[RecordedCall]:
        """Return recorded calls for one operation."""
        return [call for call in self.calls if call.operation == operation]

    async def get_collaborator_permission(
        self, repo: RepositoryReference, username: str
    ) -> str:
        """Return the configured permission level."""
        self._record("get_collaborator_permission", repo, username=username)
        return self.permission

    async def create_comment_reaction(
        self, repo: RepositoryReference, comment_id: int, content: str
    ) -> None:
        """Record a reaction."""
        self._record(
            "create_comment_reaction", repo, comment_id=comment_id, content=content
        )

    async def get_pull_request(
        self, repo: RepositoryReference, number: int
    ) -> dict[str, typ.Any]:
        """Return the configured pull request."""
        self._record("get_pull_request", repo, number=number)
        return self.pull_request

    async def create_repository_dispatch(
        self,
        repo: RepositoryReference,
        *,
        event_type: str,
        client_payload: dict[str, typ.Any],
    ) -> None:
        """Record a repository dispatch."""
        self._record(
            "create_repository_dispatch",
            repo,
            event_type=event_type,
            client_payload=client_payload,
        )

    async def create_workflow_dispatch(
        self,
        repo: RepositoryReference,
        *,
        workflow_id: str,
        ref: str,
        inputs: dict[str, str],
    ) -> None:
        """Record a workflow dispatch."""
        self._record(
            "create_workflow_dispatch",
            repo,
            workflow_id=workflow_id,
            ref=ref,
            inputs=inputs,
        )

    async def get_repository(self, repo: RepositoryReference) -> RepositoryDetails:
        """Return repository details with the configured default branch."""
        self._record("get_repository", repo)
        return RepositoryDetails(
            full_name=repo.slug, default_branch=self.default_branch
        )

    async def aclose(self) -> None:
        """Mark the client closed."""
        self.closed = True


def make_command(
    *,
    command: str = "deploy",
    repository: str = "acme/widgets",
    dispatch_type: DispatchType = DispatchType.REPOSITORY,
    event_type_suffix: str = "-command",
    permission: str = "write",
) -> Command:
    """Build a Command for dispatch tests.

    ``permission`` is stored as given, bypassing decode-time validation, so
    tests can model a misconfigured command.
    """
    return Command(
        command=command,
        repository=repository,
        dispatch_type=dispatch_type,
        event_type_suffix=event_type_suffix,
        permission=typ.cast("Permission", permission),
    )


def make_payload(
    named: dict[str, str] | None = None, *, command: str = "deploy"
) -> ClientPayload:
    """Build a ClientPayload whose slash command carries ``named`` arguments."""
    return ClientPayload(
        github={"event_name": "issue_comment", "repository": "acme/app"},
        slash_command=SlashCommandPayload(
            command=command,
            args=SlashCommandArgs(named=dict(named or {})),
        ),
    )
