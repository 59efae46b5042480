"""Tests for the exception hierarchy."""

from spendlens_core.exceptions import (
    ConfigurationError,
    InvalidTimeRangeError,
    SpendLensError,
    ValidationError,
)


class TestSpendLensError:
    def test_message_and_defaults(self):
        error = SpendLensError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.details == {}
        assert error.recoverable is False

    def test_repr(self):
        error = SpendLensError("boom", details={"code": 1})

        assert repr(error) == (
            "SpendLensError(message='boom', details={'code': 1}, recoverable=False)"
        )


class TestValidationError:
    def test_context_copied_into_details(self):
        error = ValidationError(
            "Unsupported time range",
            field="time_range",
            value="2w",
            constraint="Must be one of: 7d, 30d",
        )

        assert error.recoverable is True
        assert error.details == {
            "field": "time_range",
            "value": "2w",
            "constraint": "Must be one of: 7d, 30d",
        }


class TestInvalidTimeRangeError:
    def test_hierarchy(self):
        error = InvalidTimeRangeError("2w", allowed=["7d", "30d"])

        assert isinstance(error, ValidationError)
        assert isinstance(error, SpendLensError)
        assert str(error) == "Unsupported time range: '2w'"
        assert error.constraint == "Must be one of: 7d, 30d"

    def test_without_allowed_values(self):
        error = InvalidTimeRangeError(None)

        assert error.constraint is None
        assert "value" not in error.details


class TestConfigurationError:
    def test_details(self):
        error = ConfigurationError(
            "Bad setting",
            config_key="SPENDLENS_LOG_LEVEL",
            expected="One of DEBUG, INFO",
            actual="LOUD",
        )

        assert error.details == {
            "config_key": "SPENDLENS_LOG_LEVEL",
            "expected": "One of DEBUG, INFO",
            "actual": "LOUD",
        }
