"""Tests for the shared fallback decision point."""

import pytest

from src.oracle import OracleError, ParseError
from src.pipeline.fallback import with_fallback


def _raise(exc: Exception):  # type: ignore[no-untyped-def]
    def operation() -> str:
        raise exc

    return operation


class TestWithFallback:
    def test_success_returns_result(self) -> None:
        assert with_fallback(lambda: "ok", "fallback", label="test") == "ok"

    def test_oracle_error_returns_fallback(self) -> None:
        assert with_fallback(_raise(OracleError("down")), "fallback", label="test") == "fallback"

    def test_parse_error_returns_fallback(self) -> None:
        assert with_fallback(_raise(ParseError("junk")), "fallback", label="test") == "fallback"

    def test_value_error_returns_fallback(self) -> None:
        assert with_fallback(_raise(ValueError("bad input")), [], label="test") == []

    def test_other_errors_propagate(self) -> None:
        with pytest.raises(TypeError):
            with_fallback(_raise(TypeError("bug")), "fallback", label="test")

    def test_logs_warning_with_label(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING"):
            with_fallback(_raise(OracleError("down")), None, label="Business matching")
        assert "Business matching failed" in caplog.text
