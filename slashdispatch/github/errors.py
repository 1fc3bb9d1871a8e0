"""GitHub REST client errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when a GitHub REST call fails or returns an error response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, method: str, path: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub API HTTP {status_code} for {method} {path}",
            status_code=status_code,
        )

    @classmethod
    def timeout(cls, method: str, path: str) -> GitHubAPIError:
        """Return an error for a request that timed out."""
        return cls(f"GitHub API request timed out: {method} {path}")

    @classmethod
    def network_error(cls, method: str, path: str, detail: str) -> GitHubAPIError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"GitHub API network error for {method} {path}: {detail}")


class GitHubResponseShapeError(RuntimeError):
    """Raised when GitHub responses are missing expected fields."""

    @classmethod
    def missing(cls, field: str) -> GitHubResponseShapeError:
        """Return an error for a missing response field."""
        return cls(f"GitHub API response missing expected field: {field}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def invalid_timeout(cls, value: str) -> GitHubConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(
            f"SLASHDISPATCH_GITHUB_TIMEOUT_S must be a positive number, got {value!r}"
        )

    @classmethod
    def empty_api_url(cls) -> GitHubConfigError:
        """Return an error when the API base URL is blank."""
        return cls("GitHub API URL must be non-empty")
