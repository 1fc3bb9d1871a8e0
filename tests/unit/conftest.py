"""Unit-test fixtures for the dispatch engine."""

from __future__ import annotations

import typing as typ

import pytest

from slashdispatch.dispatch import CommandDispatcher, DispatchEventLogger
from tests.helpers.femtologging_capture import FemtoLogCapture, capture_femto_logs
from tests.helpers.github_fakes import FakeGitHubClient


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Return a fake GitHub client with default responses."""
    return FakeGitHubClient()


@pytest.fixture
def dispatcher(fake_client: FakeGitHubClient) -> CommandDispatcher:
    """Return a dispatcher bound to ``fake_client``."""
    return CommandDispatcher(fake_client, event_logger=DispatchEventLogger())


@pytest.fixture
def event_log() -> typ.Iterator[FemtoLogCapture]:
    """Capture records emitted by the dispatch event logger."""
    with capture_femto_logs("slashdispatch.dispatch.observability") as capture:
        yield capture
