"""Unit tests for dispatch observability logging."""

from __future__ import annotations

import pytest

from slashdispatch.dispatch import DispatchEventLogger, DispatchEventType
from slashdispatch.errors import DispatchFailedError, ReactionFailedError
from tests.helpers.femtologging_capture import FemtoLogCapture


class TestDispatchEventLogger:
    """Tests for ``DispatchEventLogger`` structured log events."""

    @pytest.fixture
    def logger_instance(self) -> DispatchEventLogger:
        """Return a fresh dispatch event logger."""
        return DispatchEventLogger()

    def test_run_started_emits_info(
        self, logger_instance: DispatchEventLogger, event_log: FemtoLogCapture
    ) -> None:
        """Start events carry the command, actor and target."""
        logger_instance.log_run_started(
            command="deploy", actor="octocat", repository="acme/widgets"
        )

        event_log.wait_for_count(1)
        record = event_log.records[0]
        assert record.logger == "slashdispatch.dispatch.observability"
        assert record.level == "INFO"
        assert record.message == (
            f"[{DispatchEventType.RUN_STARTED}] command=deploy actor=octocat "
            "target=acme/widgets"
        )

    def test_run_failed_emits_error_with_exc_info(
        self, logger_instance: DispatchEventLogger, event_log: FemtoLogCapture
    ) -> None:
        """Failures are logged at ERROR with the exception attached."""
        error = DispatchFailedError("boom", status_code=502)

        logger_instance.log_run_failed(command="deploy", error=error)

        event_log.wait_for_count(1)
        record = event_log.records[0]
        assert record.level == "ERROR"
        assert DispatchEventType.RUN_FAILED in record.message
        assert "error_type=DispatchFailedError" in record.message
        assert "status_code=502" in record.message
        assert record.exc_info is not None

    def test_reaction_failed_emits_debug_detail_then_warning(
        self, logger_instance: DispatchEventLogger, event_log: FemtoLogCapture
    ) -> None:
        """The cause goes to DEBUG; the warning names only the comment."""
        error = ReactionFailedError("Failed to set reaction: HTTP 403")

        logger_instance.log_reaction_failed(comment_id=99, error=error)

        event_log.wait_for_count(2)
        assert [record.level for record in event_log.records] == ["DEBUG", "WARN"]
        assert event_log.messages("DEBUG") == ["Failed to set reaction: HTTP 403"]
        assert event_log.messages("WARN") == [
            f"[{DispatchEventType.REACTION_FAILED}] "
            "Failed to set reaction on comment ID 99."
        ]

    def test_run_rejected_names_actor_and_levels(
        self, logger_instance: DispatchEventLogger, event_log: FemtoLogCapture
    ) -> None:
        """Rejections explain which permission was missing."""
        logger_instance.log_run_rejected(
            command="deploy", actor="octocat", permission="read", required="write"
        )

        event_log.wait_for_count(1)
        (message,) = event_log.messages("INFO")
        assert "user 'octocat'" in message
        assert "permission=read required=write" in message
