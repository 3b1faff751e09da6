"""Tests for log redaction and JSON formatting."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from resumatch.core.config import LogSettings
from resumatch.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    configure_logging,
    set_request_id,
)


@pytest.fixture
def capture() -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger("test_resumatch_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_resume_and_job_description_redacted(capture) -> None:
    logger, stream = capture

    logger.info(
        "analysis_submitted",
        extra={
            "resume": "Jane Doe, jane@example.com, 10 years of Python",
            "job_description": "Senior engineer for payments platform",
            "resume_chars": 45,
        },
    )

    output = stream.getvalue()
    assert "jane@example.com" not in output
    assert "payments platform" not in output
    assert "[REDACTED]" in output
    record = json.loads(output)
    assert record["resume_chars"] == 45
    assert record["message"] == "analysis_submitted"
    assert record["level"] == "info"


def test_nested_payload_redacted(capture) -> None:
    logger, stream = capture

    logger.info(
        "outbound_call",
        extra={"request": {"payload": {"resume": "secret cv"}, "method": "POST"}},
    )

    output = stream.getvalue()
    assert "secret cv" not in output
    assert "POST" in output


def test_safe_fields_untouched(capture) -> None:
    logger, stream = capture

    logger.warning(
        "analysis_failed",
        extra={"failure_kind": "service", "error_code": "match_service_error"},
    )

    record = json.loads(stream.getvalue())
    assert record["failure_kind"] == "service"
    assert record["error_code"] == "match_service_error"
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_attached_from_context(capture) -> None:
    logger, stream = capture

    set_request_id("req-abc")
    try:
        logger.info("analysis_succeeded")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-abc"


def test_configure_logging_file_output(tmp_path) -> None:
    log_file = tmp_path / "logs" / "resumatch.log"
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level

    try:
        configure_logging(
            LogSettings(output="file", file_path=str(log_file), max_bytes=1024, level="INFO")
        )
        logging.getLogger("resumatch.test").info("written", extra={"resume": "private"})
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "written" in content
        assert "private" not in content
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
