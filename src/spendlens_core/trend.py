"""Adaptive spending trend: daily points for short windows, weekly for long.

The granularity is decided once from the number of calendar days the window
touches. Both granularities go through the same bucketing routine; a daily
trend is simply a trend of one-day buckets.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from spendlens_core.models import Expense, TimeWindow, TrendBucket


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class TrendSettings:
    """Bucketing limits and bar scaling for the trend series."""

    weekly_threshold_days: int = 30
    week_length_days: int = 7
    daily_limit: int = 14
    weekly_limit: int = 10
    min_bar_width: int = 5

    def granularity_for(self, day_count: int) -> Granularity:
        if day_count > self.weekly_threshold_days:
            return Granularity.WEEKLY
        return Granularity.DAILY

    def span_for(self, granularity: Granularity) -> int:
        return self.week_length_days if granularity == Granularity.WEEKLY else 1

    def limit_for(self, granularity: Granularity) -> int:
        if granularity == Granularity.WEEKLY:
            return self.weekly_limit
        return self.daily_limit

    def bar_width(self, amount: Decimal, trend: Sequence[TrendBucket]) -> Decimal:
        """Bar width for ``amount`` with this configuration's minimum."""
        return scale_bar_width(amount, trend, minimum=self.min_bar_width)


DEFAULT_TREND_SETTINGS = TrendSettings()


def enumerate_days(window: TimeWindow) -> list[date]:
    """Every calendar date from the window's start to its end, inclusive."""
    first, last = window.first_day, window.last_day
    return [first + timedelta(days=n) for n in range((last - first).days + 1)]


def daily_totals(expenses: Iterable[Expense]) -> dict[date, Decimal]:
    totals: dict[date, Decimal] = {}
    for expense in expenses:
        day = expense.occurred_on
        if day is None:
            continue
        totals[day] = totals.get(day, Decimal("0")) + expense.amount
    return totals


def bucketize(
    expenses: Iterable[Expense],
    days: Sequence[date],
    span: int,
    limit: int,
) -> list[TrendBucket]:
    """Group consecutive ``days`` into buckets of ``span`` days.

    The final bucket may be shorter than ``span``. Only the last ``limit``
    buckets are returned, in chronological order.
    """
    if limit <= 0:
        return []
    totals = daily_totals(expenses)
    buckets = []
    for offset in range(0, len(days), span):
        chunk = days[offset:offset + span]
        buckets.append(
            TrendBucket(
                date=chunk[0].isoformat(),
                amount=sum((totals.get(d, Decimal("0")) for d in chunk), Decimal("0")),
                is_weekly=span > 1,
                day_count=len(chunk),
            )
        )
    return buckets[-limit:]


def build_trend(
    expenses: Iterable[Expense],
    window: TimeWindow,
    settings: Optional[TrendSettings] = None,
) -> list[TrendBucket]:
    """Build the trend series for the current window.

    Windows touching more than ``weekly_threshold_days`` calendar days are
    bucketed by week (last ``weekly_limit`` kept); shorter ones by day (last
    ``daily_limit`` kept). An empty ``expenses`` yields zero-amount buckets.
    """
    settings = settings or DEFAULT_TREND_SETTINGS
    days = enumerate_days(window)
    granularity = settings.granularity_for(len(days))
    return bucketize(
        expenses,
        days,
        span=settings.span_for(granularity),
        limit=settings.limit_for(granularity),
    )


def scale_bar_width(
    amount: Decimal,
    trend: Sequence[TrendBucket],
    minimum: Union[int, Decimal] = 5,
) -> Decimal:
    """Width of a trend bar as a percentage of the largest bucket.

    Never narrower than ``minimum``. An empty or all-zero trend has no peak to
    scale against, so every bar gets the minimum width.
    """
    floor = Decimal(minimum)
    peak = max((b.amount for b in trend), default=Decimal("0"))
    if peak <= 0:
        return floor
    return max(amount / peak * Decimal("100"), floor)
