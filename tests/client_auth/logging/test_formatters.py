"""Tests for JSON and console log formatters."""

import json
import logging
import sys

import pytest

from client_auth.logging.context import clear_log_context, set_log_context
from client_auth.logging.formatters import ConsoleFormatter, JSONFormatter


def _make_record(
    msg="test message",
    level=logging.INFO,
    name="test.logger",
    exc_info=None,
    **extras,
):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    @pytest.fixture(autouse=True)
    def clear_context(self):
        clear_log_context()
        yield
        clear_log_context()

    def test_formats_basic_json_with_required_fields(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "test.logger"
        assert output["message"] == "test message"
        assert output["ts"].endswith("Z")

    def test_includes_context(self):
        set_log_context(client_name="catalog", operation="refresh", trace_id="abc123")
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["client_name"] == "catalog"
        assert output["operation"] == "refresh"
        assert output["trace_id"] == "abc123"

    def test_omits_empty_context(self):
        output = json.loads(JSONFormatter().format(_make_record()))
        assert "client_name" not in output

    def test_includes_whitelisted_extras(self):
        record = _make_record(
            token_state="about_to_expire",
            grant_type="refresh_token",
            headers_added=["Authorization"],
        )
        output = json.loads(JSONFormatter().format(record))

        assert output["token_state"] == "about_to_expire"
        assert output["grant_type"] == "refresh_token"
        assert output["headers_added"] == ["Authorization"]

    def test_ignores_unknown_extras(self):
        output = json.loads(JSONFormatter().format(_make_record(refresh_token="R1")))
        assert "refresh_token" not in output
        assert "R1" not in json.dumps(output)

    def test_coerces_numeric_fields(self):
        output = json.loads(JSONFormatter().format(_make_record(http_status="401")))
        assert output["http_status"] == 401

    def test_uncoercible_numeric_becomes_null(self):
        output = json.loads(JSONFormatter().format(_make_record(remaining_seconds="soon")))
        assert output["remaining_seconds"] is None

    def test_redacts_url_credentials(self):
        record = _make_record(
            http_url="https://h/p?X-Amz-Signature=abc&ref=main&access_token=xyz"
        )
        output = json.loads(JSONFormatter().format(record))

        assert "abc" not in output["http_url"]
        assert "xyz" not in output["http_url"]
        assert "ref=main" in output["http_url"]
        assert "X-Amz-Signature=[REDACTED]" in output["http_url"]

    def test_file_location_on_debug(self):
        output = json.loads(JSONFormatter().format(_make_record(level=logging.DEBUG)))
        assert output["file"] == "test.py:42"

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _make_record(level=logging.ERROR, exc_info=sys.exc_info())

        output = json.loads(JSONFormatter().format(record))

        assert output["exception"]["type"] == "ValueError"
        assert output["exception"]["message"] == "boom"
        assert "Traceback" in output["exception"]["stacktrace"]


class TestConsoleFormatter:

    @pytest.fixture(autouse=True)
    def clear_context(self):
        clear_log_context()
        yield
        clear_log_context()

    def _formatter(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        return formatter

    def test_basic_line(self):
        line = self._formatter().format(_make_record())
        assert line.endswith(" - INFO - test message")

    def test_includes_context_tags(self):
        set_log_context(client_name="catalog", operation="sign")
        line = self._formatter().format(_make_record())
        assert "[catalog]" in line
        assert "[sign]" in line

    def test_trace_prefix(self):
        line = self._formatter().format(_make_record(trace_id="0123456789abcdef"))
        assert "[01234567] test message" in line

    def test_colors_when_enabled(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = True
        line = formatter.format(_make_record(level=logging.ERROR))
        assert "\033[31mERROR\033[0m" in line
