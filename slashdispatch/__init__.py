"""Forward chat-style slash commands to other repositories as dispatch events."""

from __future__ import annotations

from .commands import ClientPayload, Command, DispatchType, SlashCommandPayload
from .common.slug import RepositoryReference, parse_repo_slug
from .dispatch import CommandDispatcher, CommandRun, DispatchRequest, RunState

__all__ = [
    "ClientPayload",
    "Command",
    "CommandDispatcher",
    "CommandRun",
    "DispatchRequest",
    "DispatchType",
    "RepositoryReference",
    "RunState",
    "SlashCommandPayload",
    "parse_repo_slug",
]
