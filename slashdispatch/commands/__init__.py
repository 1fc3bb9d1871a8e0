"""Command and payload structures consumed by the dispatch engine."""

from __future__ import annotations

from .models import (
    ClientPayload,
    Command,
    DispatchType,
    IssueType,
    ReactionKind,
    SlashCommandArgs,
    SlashCommandPayload,
)
from .permissions import Permission, PermissionLevel, actor_has_permission

__all__ = [
    "ClientPayload",
    "Command",
    "DispatchType",
    "IssueType",
    "Permission",
    "PermissionLevel",
    "ReactionKind",
    "SlashCommandArgs",
    "SlashCommandPayload",
    "actor_has_permission",
]
