"""GitHub REST client used by the command dispatcher."""

from __future__ import annotations

import dataclasses
import os
import typing as typ
from urllib.parse import quote

import httpx
import msgspec

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import CollaboratorPermission, RepositoryDetails

if typ.TYPE_CHECKING:
    from slashdispatch.common.slug import RepositoryReference

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "slashdispatch/0.1"
_API_VERSION = "2022-11-28"

M = typ.TypeVar("M")


class GitHubDispatchClient(typ.Protocol):
    """Interface for the remote operations the dispatcher consumes."""

    async def get_collaborator_permission(
        self, repo: RepositoryReference, username: str
    ) -> str:
        """Return the permission level ``username`` holds on ``repo``."""
        ...

    async def create_comment_reaction(
        self, repo: RepositoryReference, comment_id: int, content: str
    ) -> None:
        """Add a reaction to an issue comment."""
        ...

    async def get_pull_request(
        self, repo: RepositoryReference, number: int
    ) -> dict[str, typ.Any]:
        """Return pull request metadata."""
        ...

    async def create_repository_dispatch(
        self,
        repo: RepositoryReference,
        *,
        event_type: str,
        client_payload: dict[str, typ.Any],
    ) -> None:
        """Send a ``repository_dispatch`` event."""
        ...

    async def create_workflow_dispatch(
        self,
        repo: RepositoryReference,
        *,
        workflow_id: str,
        ref: str,
        inputs: dict[str, str],
    ) -> None:
        """Trigger a ``workflow_dispatch`` run."""
        ...

    async def get_repository(self, repo: RepositoryReference) -> RepositoryDetails:
        """Return repository metadata including the default branch."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRestConfig:
    """Configuration for the GitHub REST API client.

    An empty ``token`` sends unauthenticated requests, which is enough for
    read calls against public repositories.
    """

    token: str = ""
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw_timeout = os.environ.get("SLASHDISPATCH_GITHUB_TIMEOUT_S")
        if raw_timeout is None:
            return _DEFAULT_TIMEOUT_S

        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise GitHubConfigError.invalid_timeout(raw_timeout) from exc

        if timeout <= 0:
            raise GitHubConfigError.invalid_timeout(raw_timeout)
        return timeout

    @classmethod
    def from_env(cls) -> GitHubRestConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``SLASHDISPATCH_GITHUB_TOKEN``: token, falling back to ``GITHUB_TOKEN``
        - ``SLASHDISPATCH_GITHUB_API_URL``: optional API base URL override
        - ``SLASHDISPATCH_GITHUB_TIMEOUT_S``: optional timeout in seconds

        Raises
        ------
        GitHubConfigError
            If the timeout or API URL is invalid.

        """
        token = (
            os.environ.get("SLASHDISPATCH_GITHUB_TOKEN")
            or os.environ.get("GITHUB_TOKEN")
            or ""
        ).strip()
        api_url = os.environ.get("SLASHDISPATCH_GITHUB_API_URL", _DEFAULT_API_URL)
        if not api_url.strip():
            raise GitHubConfigError.empty_api_url()

        return cls(
            token=token,
            api_url=api_url.strip(),
            timeout_s=cls._parse_timeout_from_env(),
        )


def _repo_path(repo: RepositoryReference) -> str:
    return f"/repos/{quote(repo.owner, safe='')}/{quote(repo.name, safe='')}"


class GitHubRestClient:
    """httpx-backed implementation of :class:`GitHubDispatchClient`.

    Parameters
    ----------
    config
        Connection settings for the REST API.
    http_client
        Optional ``httpx.AsyncClient`` for testing. When omitted the instance
        creates and owns its own client.

    """

    def __init__(
        self,
        config: GitHubRestConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with configuration."""
        self._config = config
        self._base_url = config.api_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if config.token:
            self._headers["Authorization"] = f"Bearer {config.token}"

    @property
    def config(self) -> GitHubRestConfig:
        """Read-only access to the client configuration."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GitHubRestClient:
        """Return the client for use as an async context manager."""
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Close owned resources on context exit."""
        await self.aclose()

    async def get_collaborator_permission(
        self, repo: RepositoryReference, username: str
    ) -> str:
        """Return the permission level ``username`` holds on ``repo``."""
        path = (
            f"{_repo_path(repo)}/collaborators/{quote(username, safe='')}/permission"
        )
        response = await self._request("GET", path)
        lookup = self._decode(response, CollaboratorPermission, field="permission")
        return lookup.permission

    async def create_comment_reaction(
        self, repo: RepositoryReference, comment_id: int, content: str
    ) -> None:
        """Add a reaction to an issue comment."""
        path = f"{_repo_path(repo)}/issues/comments/{comment_id}/reactions"
        await self._request("POST", path, json={"content": content})

    async def get_pull_request(
        self, repo: RepositoryReference, number: int
    ) -> dict[str, typ.Any]:
        """Return the full pull request object."""
        response = await self._request("GET", f"{_repo_path(repo)}/pulls/{number}")
        return self._decode(response, dict[str, typ.Any], field="pull_request")

    async def create_repository_dispatch(
        self,
        repo: RepositoryReference,
        *,
        event_type: str,
        client_payload: dict[str, typ.Any],
    ) -> None:
        """Send a ``repository_dispatch`` event with an opaque payload."""
        await self._request(
            "POST",
            f"{_repo_path(repo)}/dispatches",
            json={"event_type": event_type, "client_payload": client_payload},
        )

    async def create_workflow_dispatch(
        self,
        repo: RepositoryReference,
        *,
        workflow_id: str,
        ref: str,
        inputs: dict[str, str],
    ) -> None:
        """Trigger a ``workflow_dispatch`` run of ``workflow_id`` on ``ref``."""
        path = (
            f"{_repo_path(repo)}/actions/workflows/"
            f"{quote(workflow_id, safe='')}/dispatches"
        )
        await self._request("POST", path, json={"ref": ref, "inputs": inputs})

    async def get_repository(self, repo: RepositoryReference) -> RepositoryDetails:
        """Return repository metadata including the default branch."""
        response = await self._request("GET", _repo_path(repo))
        return self._decode(response, RepositoryDetails, field="repository")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, typ.Any] | None = None,
    ) -> httpx.Response:
        """Send a request and translate transport and HTTP failures.

        Raises
        ------
        GitHubAPIError
            On timeouts, network failures, and non-2xx responses. Redirects
            are not followed, so a 3xx response is an error too.

        """
        try:
            response = await self._client.request(
                method,
                f"{self._base_url}{path}",
                headers=self._headers,
                json=json,
            )
        except httpx.TimeoutException as exc:
            raise GitHubAPIError.timeout(method, path) from exc
        except httpx.RequestError as exc:
            raise GitHubAPIError.network_error(method, path, str(exc)) from exc

        if not response.is_success:
            raise GitHubAPIError.http_error(response.status_code, method, path)
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[M], *, field: str) -> M:
        try:
            return msgspec.json.decode(response.content, type=model)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.missing(field) from exc
