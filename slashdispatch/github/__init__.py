"""GitHub REST client used to query and dispatch to repositories."""

from __future__ import annotations

from .client import GitHubDispatchClient, GitHubRestClient, GitHubRestConfig
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import RepositoryDetails

__all__ = [
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubDispatchClient",
    "GitHubResponseShapeError",
    "GitHubRestClient",
    "GitHubRestConfig",
    "RepositoryDetails",
]
