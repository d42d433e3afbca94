"""Tests for structured logging helpers."""

import json
import logging

import pytest

from cmdp import CommandDefinition, parse_none, validate
from cmdp.dispatcher import dispatch_line
from cmdp.logging import (
    StructuredTextFormatter,
    build_run_log_path,
    log_event,
    setup_logging,
    summarize_text,
)


def _events(caplog, event):
    payloads = []
    for record in caplog.records:
        message = record.getMessage()
        if message.startswith("{"):
            payload = json.loads(message)
            if payload.get("event") == event:
                payloads.append(payload)
    return payloads


def _record(msg, name="cmdp"):
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestLogEvent:
    """Test structured event emission."""

    def test_payload_is_json(self, caplog, frozen_time):
        """Test that events carry a timestamp, name and log-safe fields."""
        with caplog.at_level(logging.INFO, logger="cmdp"):
            log_event("processor_start", commands=2, names=("a", "b"))

        (payload,) = _events(caplog, "processor_start")
        assert payload["ts"].startswith("2026-02-09")
        assert payload["commands"] == 2
        assert payload["names"] == ["a", "b"]

    def test_disabled_level_skipped(self, caplog):
        """Test that events below the logger level are not emitted."""
        with caplog.at_level(logging.INFO, logger="cmdp"):
            log_event("command_dispatch", level=logging.DEBUG, command="run")

        assert _events(caplog, "command_dispatch") == []

    def test_command_error_logged(self, caplog, diagnostics):
        """Test that dispatch failures are logged with their stage."""
        table = validate(
            [CommandDefinition(long_name="test", help="x", parser=parse_none(), runner=lambda a: None)]
        )

        with caplog.at_level(logging.WARNING, logger="cmdp"):
            dispatch_line(table, "bogus", diagnostics)

        (payload,) = _events(caplog, "command_error")
        assert payload["stage"] == "select"
        assert payload["command"] == "bogus"
        assert payload["error_type"] == "UnknownCommandError"


class TestSummarizeText:
    """Test log text summarization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ""), ("  a \n b  ", "a b"), (42, "42")],
    )
    def test_summarize_text(self, value, expected):
        """Test that whitespace runs collapse to single spaces."""
        assert summarize_text(value) == expected


class TestStructuredTextFormatter:
    """Test the plaintext block formatter."""

    def test_json_event_block(self):
        """Test that JSON messages become ordered key/value blocks."""
        formatter = StructuredTextFormatter()
        record = _record('{"event":"processor_stop","uptime_ms":3.5,"reason":"source_closed","lines":2}')

        result = formatter.format(record)
        lines = result.splitlines()

        assert lines[0] == "=== processor_stop ==="
        keys = [line.split(":", 1)[0] for line in lines[1:]]
        assert keys == ["level", "reason", "lines", "uptime_ms"]

    def test_unlisted_event_sorted_after_header(self):
        """Test that events without a field order list timestamp, level, then sorted keys."""
        formatter = StructuredTextFormatter()
        record = _record('{"ts":"2026-02-09T10:00:00","event":"app_start","zeta":1,"alpha":null,"beta":2}')

        lines = formatter.format(record).splitlines()

        assert lines == [
            "=== app_start ===",
            "ts: 2026-02-09T10:00:00",
            "level: INFO",
            "beta: 2",
            "zeta: 1",
        ]

    def test_plain_message_uses_logger_name(self):
        """Test that non-JSON messages fall back to the logger name."""
        formatter = StructuredTextFormatter()

        result = formatter.format(_record("Unexpected error", name="cmdp.cli"))

        assert "=== cmdp.cli ===" in result
        assert "message: Unexpected error" in result

    def test_newlines_escaped(self):
        """Test that multi-line values stay on one line."""
        formatter = StructuredTextFormatter()

        result = formatter.format(_record('{"event":"command_error","error":"a\\nb"}'))

        assert "error: a\\nb" in result

    def test_blank_line_between_entries(self):
        """Test that entries after the first are separated by a blank line."""
        formatter = StructuredTextFormatter()

        first = formatter.format(_record("one"))
        second = formatter.format(_record("two"))

        assert not first.startswith("\n")
        assert second.startswith("\n===")


class TestSetup:
    """Test logging setup helpers."""

    def test_build_run_log_path_unique(self, tmp_path, frozen_time):
        """Test that an existing log file gets a numbered sibling."""
        first = build_run_log_path(str(tmp_path / "logs"))
        open(first, "w").close()

        second = build_run_log_path(str(tmp_path / "logs"))

        assert first.endswith("cmdp_2026-02-09_10-00-00.log")
        assert second.endswith("cmdp_2026-02-09_10-00-00_1.log")

    def test_setup_logging_writes_file(self, tmp_path):
        """Test that events are written through the structured formatter."""
        log_file = tmp_path / "run.log"

        setup_logging(str(log_file))
        log_event("app_start", log_file=str(log_file))
        logging.getLogger().handlers[0].flush()

        content = log_file.read_text(encoding="utf-8")
        assert "=== app_start ===" in content
        assert "level: INFO" in content
        assert f"log_file: {log_file}" in content

    def test_setup_logging_without_file_disables(self):
        """Test that logging is silenced when no file is configured."""
        setup_logging(None)

        assert not logging.getLogger("cmdp").isEnabledFor(logging.CRITICAL)
