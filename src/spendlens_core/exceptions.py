"""Custom exceptions for the SpendLens analytics engine.

All exceptions inherit from SpendLensError, so callers embedding the engine
can catch every engine-specific failure with a single handler.

Only caller-contract violations are raised. Data-quality problems in the
expense records themselves (for example an unparseable date) are normalized
locally and never surface as exceptions.

Example:
    try:
        summary = analyzer.analyze(expenses, time_range=selector)
    except InvalidTimeRangeError as e:
        logger.warning("bad_selector", **e.details)
        summary = analyzer.analyze(expenses)
    except SpendLensError as e:
        logger.error("analytics_failed", error=str(e))
"""

from typing import Any, Optional


class SpendLensError(Exception):
    """Base exception for all SpendLens errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(SpendLensError):
    """Raised when a caller passes an input outside the engine's contract.

    Attributes:
        field: The argument or field that failed validation.
        value: The rejected value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Unsupported time range",
        ...     field="time_range",
        ...     value="2w",
        ...     constraint="Must be one of: 7d, 30d, 90d, 1y",
        ... )
        ValidationError: Unsupported time range
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the argument that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the caller can retry with corrected input.
                Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class InvalidTimeRangeError(ValidationError):
    """Raised when a range selector is not one of the supported values."""

    def __init__(
        self,
        value: Any,
        *,
        allowed: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        allowed = allowed or []
        super().__init__(
            f"Unsupported time range: {value!r}",
            field="time_range",
            value=value,
            constraint=f"Must be one of: {', '.join(allowed)}" if allowed else None,
            details=details,
        )
        self.allowed = allowed


class ConfigurationError(SpendLensError):
    """Raised when engine configuration is invalid.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "SpendLensError",
    "ValidationError",
    "InvalidTimeRangeError",
    "ConfigurationError",
]
