"""SpendLens Core - Spending analytics for expense dashboards."""

__version__ = "0.1.0"

from .analyzer import SpendingAnalyzer, compute_analytics
from .config import AnalyticsConfig
from .exceptions import (
    ConfigurationError,
    InvalidTimeRangeError,
    SpendLensError,
    ValidationError,
)
from .models import (
    AnalyticsEvent,
    AnalyticsSummary,
    CategoryTotal,
    Expense,
    TimeRange,
    TimeWindow,
    TrendBucket,
    WindowPair,
)
from .windows import resolve_windows

__all__ = [
    "SpendingAnalyzer",
    "compute_analytics",
    "AnalyticsConfig",
    "resolve_windows",
    # Models
    "Expense",
    "TimeRange",
    "TimeWindow",
    "WindowPair",
    "AnalyticsSummary",
    "AnalyticsEvent",
    "CategoryTotal",
    "TrendBucket",
    # Exceptions
    "SpendLensError",
    "ValidationError",
    "InvalidTimeRangeError",
    "ConfigurationError",
]
