"""Tests for structlog configuration and the LoggingBehavior."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from ums.application.get_user import GetUserQuery
from ums.domain.exceptions import EntityNotFoundError
from ums.infrastructure.bootstrap import build_mediator
from ums.infrastructure.logging import configure_logging
from ums.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
)


def _json_lines(captured: str) -> list[dict]:
    return [json.loads(line) for line in captured.strip().splitlines() if line]


class TestConfigureLogging:

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("ums").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("ums").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("ums.test").warning("json test", answer=42)

        parsed = _json_lines(capfd.readouterr().err)[-1]
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "ums.test"
        assert "timestamp" in parsed

    def test_stdlib_records_share_the_renderer(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("ums.plain").debug("plain record")

        parsed = _json_lines(capfd.readouterr().err)[-1]
        assert parsed["event"] == "plain record"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "ums.plain"


class TestLoggingBehavior:

    def test_logs_dispatch_and_outcome(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        build_mediator(InMemoryUserRepository()).send(GetUserQuery(1))

        events = _json_lines(capfd.readouterr().err)
        names = [e["event"] for e in events]
        assert names == ["request.dispatched", "request.handled"]
        assert all(e["request"] == "GetUserQuery" for e in events)
        assert "elapsed_ms" in events[-1]

    def test_logs_failure_and_reraises(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        with pytest.raises(EntityNotFoundError):
            build_mediator(InMemoryUserRepository()).send(GetUserQuery(99))

        failed = _json_lines(capfd.readouterr().err)[-1]
        assert failed["event"] == "request.failed"
        assert failed["error"] == "EntityNotFoundError"
