"""Unit tests for the default permission policy."""

from __future__ import annotations

import pytest

from slashdispatch.commands import Permission, PermissionLevel, actor_has_permission


@pytest.mark.parametrize(
    ("actor", "required", "allowed"),
    [
        ("admin", "write", True),
        ("maintain", "maintain", True),
        ("write", "write", True),
        ("triage", "write", False),
        ("read", "triage", False),
        ("none", "read", False),
        ("ADMIN", "admin", True),
    ],
)
def test_actor_has_permission(
    actor: str,
    required: str,
    allowed: bool,  # noqa: FBT001
) -> None:
    """Actors need at least the required level."""
    assert actor_has_permission(actor, required) is allowed


@pytest.mark.parametrize("value", [None, "", "superuser"])
def test_unknown_levels_parse_as_none(value: str | None) -> None:
    """Unrecognised permission strings grant nothing."""
    assert PermissionLevel.parse(value) is PermissionLevel.NONE


def test_unknown_actor_level_cannot_run_read_commands() -> None:
    """An unrecognised actor level fails any real requirement."""
    assert actor_has_permission("superuser", "read") is False


@pytest.mark.parametrize("actor", ["none", "read", "admin"])
@pytest.mark.parametrize("required", ["wirte", "admn", ""])
def test_unknown_required_level_denies_every_actor(actor: str, required: str) -> None:
    """A misspelled requirement is never satisfied."""
    assert actor_has_permission(actor, required) is False


def test_permission_names_map_to_levels() -> None:
    """Each accepted name stands for the level of the same name."""
    assert [name.level for name in Permission] == list(PermissionLevel)
