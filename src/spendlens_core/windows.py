"""Resolve the current and comparison windows for a range selector."""

from datetime import date, datetime
from typing import Union

from spendlens_core.exceptions import ValidationError
from spendlens_core.models import TimeRange, TimeWindow, WindowPair, start_of_day

Instant = Union[date, datetime]


def normalize_instant(now: Instant) -> datetime:
    """Reduce a reference instant to a naive datetime.

    Expense dates carry no time zone, so an aware ``now`` is compared by its
    wall-clock reading. A bare ``date`` means the midnight that begins it.

    Raises:
        ValidationError: If ``now`` is neither a date nor a datetime.
    """
    if isinstance(now, datetime):
        return now.replace(tzinfo=None)
    if isinstance(now, date):
        return start_of_day(now)
    raise ValidationError(
        f"now must be a date or datetime, got {type(now).__name__}",
        field="now",
        value=now,
        constraint="Must be a date or datetime",
    )


def resolve_windows(time_range: Union[TimeRange, str], now: Instant) -> WindowPair:
    """Compute the current window ending at ``now`` and the window before it.

    The comparison window is contiguous with the current one and has the
    same duration: ``previous.end == current.start``.

    Raises:
        InvalidTimeRangeError: If ``time_range`` is not a supported selector.
    """
    selector = TimeRange.parse(time_range)
    end = normalize_instant(now)
    start = end - selector.offset
    length = end - start

    return WindowPair(
        time_range=selector,
        current=TimeWindow(start=start, end=end),
        previous=TimeWindow(start=start - length, end=start),
    )
