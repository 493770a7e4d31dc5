"""Tests for split_every/lib/errors.py - structured exception hierarchy."""

import pytest

from split_every.lib.errors import (
    ConfigurationError,
    InvalidCountError,
    InvalidPatternError,
    SourceEncodingError,
    SplitEveryError,
)


class TestSplitEveryError:
    """Tests for base SplitEveryError class."""

    def test_basic_message(self):
        error = SplitEveryError("Something went wrong")
        assert str(error) == "Something went wrong"

    def test_with_details(self):
        error = SplitEveryError("Bad input", details={"offset": 12, "unit": "byte"})
        assert "offset: 12" in str(error)
        assert "unit: byte" in str(error)

    def test_with_suggestion(self):
        error = SplitEveryError("Bad input", suggestion="Decode it first")
        assert "Suggestion: Decode it first" in str(error)

    def test_to_dict(self):
        error = SplitEveryError("Test error", details={"key": "value"}, suggestion="Fix it")
        d = error.to_dict()
        assert d["error_type"] == "SplitEveryError"
        assert d["message"] == "Test error"
        assert d["details"]["key"] == "value"
        assert d["suggestion"] == "Fix it"


class TestInvalidCountError:
    """Tests for InvalidCountError."""

    def test_records_count(self):
        error = InvalidCountError("n must be greater than 0", n=0)
        assert error.n == 0
        assert error.details["minimum"] == 1
        assert "n: 0" in str(error)

    def test_suggestion_depends_on_zero_support(self):
        assert "n = 0" in InvalidCountError("x", n=-1, allow_zero=True).suggestion
        assert "pull-based" in InvalidCountError("x", n=0).suggestion

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidCountError("x", n=0)


class TestInvalidPatternError:
    """Tests for InvalidPatternError."""

    def test_records_pattern(self):
        error = InvalidPatternError("empty", pattern="")
        assert error.pattern == ""
        assert error.details["pattern"] == "''"
        assert isinstance(error, ValueError)


class TestSourceEncodingError:
    """Tests for SourceEncodingError."""

    def test_with_cause(self):
        cause = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        error = SourceEncodingError("not UTF-8", cause=cause)
        assert error.details["cause_type"] == "UnicodeDecodeError"
        assert error.details["encoding"] == "utf-8"
        assert error.suggestion


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_with_field_and_value(self):
        error = ConfigurationError("Invalid mode", field="mode", value="regex")
        assert error.field == "mode"
        assert "field: mode" in str(error)
        assert "value: regex" in str(error)

    def test_is_not_a_value_error(self):
        assert not isinstance(ConfigurationError("x"), ValueError)
        assert isinstance(ConfigurationError("x"), SplitEveryError)
