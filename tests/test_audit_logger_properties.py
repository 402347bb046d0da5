"""
Property-based tests for Audit Logger module.

Uses Hypothesis to verify output formats, level filtering and masking of
sensitive values such as registrar credentials.
"""

import json
from io import StringIO

import pytest
from hypothesis import given, settings, assume
from hypothesis import strategies as st

from domain_availability.audit_logger import AuditLogger
from domain_availability.config import LoggingConfig
from domain_availability.enums import LogLevel


@st.composite
def message_strategy(draw) -> str:
    """Generate valid log messages."""
    return draw(st.text(
        alphabet=st.characters(
            whitelist_categories=('L', 'N', 'P', 'S', 'Z'),
            blacklist_characters='\x00\n\r',
        ),
        min_size=1,
        max_size=200,
    ))


sensitive_key_strategy = st.sampled_from([
    'token', 'secret', 'password', 'api_key', 'api_secret',
    'authorization', 'credentials', 'private_key', 'access_token',
    'MAINREG_API_KEY', 'mainreg_api_secret',
])


class TestOutputFormatProperty:
    """JSON and text output carry the same entry."""

    @given(level=st.sampled_from(list(LogLevel)), message=message_strategy())
    @settings(max_examples=100)
    def test_json_output_round_trips(self, level: LogLevel, message: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream)

        logger.log(level, "BatchOrchestrator", message, {"domain": "example.com"})

        obj = json.loads(stream.getvalue().strip())
        assert obj["level"] == level.value
        assert obj["component"] == "BatchOrchestrator"
        assert obj["message"] == message
        assert obj["data"] == {"domain": "example.com"}

    def test_text_output_format(self) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream)

        entry = logger.warn("WhoisChecker", "lookup failed", {"domain": "bar.com"})

        line = stream.getvalue().strip()
        assert line == logger.get_text_output(entry)
        assert " WARN [WhoisChecker] lookup failed " in line
        assert '"domain": "bar.com"' in line

    def test_both_formats_write_two_lines(self) -> None:
        stream = StringIO()
        AuditLogger(output_format="both", output_stream=stream).info("X", "hello")
        assert len(stream.getvalue().strip().splitlines()) == 2

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError):
            AuditLogger(output_format="xml")


class TestLevelFiltering:
    """Entries below the minimum level are dropped."""

    @given(level=st.sampled_from(list(LogLevel)), minimum=st.sampled_from(list(LogLevel)))
    @settings(max_examples=50)
    def test_min_level(self, level: LogLevel, minimum: LogLevel) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream, min_level=minimum)

        entry = logger.log(level, "X", "message")

        if level.severity >= minimum.severity:
            assert entry is not None
            assert stream.getvalue()
        else:
            assert entry is None
            assert stream.getvalue() == ""
            assert logger.entries == []

    def test_from_config(self) -> None:
        logger = AuditLogger.from_config(LoggingConfig(level="warn", output_format="json"), StringIO())
        assert logger.output_format == "json"
        assert logger.min_level == LogLevel.WARN
        assert logger.info("X", "dropped") is None


class TestSensitiveDataMaskingProperty:
    """Sensitive values never reach the output stream."""

    @given(key=sensitive_key_strategy, value=st.text(alphabet="abcdefghij0123456789", min_size=8, max_size=40))
    @settings(max_examples=100)
    def test_sensitive_values_masked(self, key: str, value: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="both", output_stream=stream)

        logger.info("RegistrarChecker", "fallback", {key: value, "nested": {key: value}})

        assert value not in stream.getvalue()
        entry = logger.entries[0]
        assert entry.data[key] == AuditLogger.MASK_VALUE
        assert entry.data["nested"][key] == AuditLogger.MASK_VALUE

    @given(key=st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=20), value=st.integers())
    @settings(max_examples=100)
    def test_other_values_untouched(self, key: str, value: int) -> None:
        for sensitive in AuditLogger.SENSITIVE_KEYS:
            assume(sensitive not in key)
        logger = AuditLogger(output_format="json", output_stream=StringIO())
        logger.info("X", "m", {key: value})
        assert logger.entries[0].data[key] == value

    def test_log_error_includes_exception_context(self) -> None:
        logger = AuditLogger(output_format="json", output_stream=StringIO())
        entry = logger.log_error("WhoisChecker", "failed", error=RuntimeError("boom"), additional_data={"domain": "a.com"})
        assert entry.level == LogLevel.ERROR
        assert entry.data["error_type"] == "RuntimeError"
        assert entry.data["error_message"] == "boom"
        assert entry.data["domain"] == "a.com"
