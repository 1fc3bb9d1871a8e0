"""Typed views over GitHub REST responses."""

from __future__ import annotations

import msgspec


class RepositoryDetails(msgspec.Struct, kw_only=True):
    """The subset of ``GET /repos/{owner}/{repo}`` the dispatcher reads."""

    full_name: str
    default_branch: str


class CollaboratorPermission(msgspec.Struct, kw_only=True):
    """Response of the collaborator permission lookup."""

    permission: str
