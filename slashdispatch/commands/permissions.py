"""Default authorization policy for slash commands.

Collaborator permission levels form a strict order. An actor may run a command
when their level is at least the level the command requires.
"""

from __future__ import annotations

import enum


class PermissionLevel(enum.IntEnum):
    """Collaborator permission levels ordered from least to most privileged."""

    NONE = 0
    READ = 1
    TRIAGE = 2
    WRITE = 3
    MAINTAIN = 4
    ADMIN = 5

    @classmethod
    def lookup(cls, value: str | None) -> PermissionLevel | None:
        """Return the level named by ``value``, or ``None`` when unknown."""
        if not value:
            return None
        return cls.__members__.get(value.strip().upper())

    @classmethod
    def parse(cls, value: str | None) -> PermissionLevel:
        """Return the level named by ``value``; unknown names map to ``NONE``."""
        return cls.lookup(value) or cls.NONE


class Permission(enum.StrEnum):
    """Permission names accepted in a command definition."""

    NONE = "none"
    READ = "read"
    TRIAGE = "triage"
    WRITE = "write"
    MAINTAIN = "maintain"
    ADMIN = "admin"

    @property
    def level(self) -> PermissionLevel:
        """Return the ordered level this name stands for."""
        return PermissionLevel[self.name]


def actor_has_permission(actor_permission: str, required_permission: str) -> bool:
    """Return whether ``actor_permission`` satisfies ``required_permission``.

    An unrecognised actor level ranks as ``none``. An unrecognised required
    level is never satisfied.

    Examples
    --------
    >>> actor_has_permission("admin", "write")
    True
    >>> actor_has_permission("read", "write")
    False
    >>> actor_has_permission("admin", "wirte")
    False

    """
    required = PermissionLevel.lookup(required_permission)
    if required is None:
        return False
    return PermissionLevel.parse(actor_permission) >= required


__all__ = ["Permission", "PermissionLevel", "actor_has_permission"]
