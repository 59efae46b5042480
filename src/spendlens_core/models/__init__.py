"""Data models for spendlens-core.

- Expense records and the range selector (expense.py)
- Windows, totals, trend buckets and the analytics summary (analytics.py)
"""

from spendlens_core.models.expense import (
    ISO_DATE_FORMAT,
    Expense,
    TimeRange,
    parse_iso_date,
)
from spendlens_core.models.analytics import (
    AnalyticsEvent,
    AnalyticsStep,
    AnalyticsSummary,
    CategoryTotal,
    PeriodTotals,
    TimeWindow,
    TrendBucket,
    WindowPair,
    start_of_day,
)

__all__ = [
    # Records
    "ISO_DATE_FORMAT",
    "Expense",
    "TimeRange",
    "parse_iso_date",
    # Windows
    "TimeWindow",
    "WindowPair",
    "start_of_day",
    # Results
    "PeriodTotals",
    "CategoryTotal",
    "TrendBucket",
    "AnalyticsSummary",
    # Audit and telemetry
    "AnalyticsStep",
    "AnalyticsEvent",
]
