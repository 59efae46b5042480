"""Expense records and the dashboard range selector.

Expense records arrive from the persistence gateway already validated
(positive amounts, non-empty titles and categories). The engine keeps the
record's ``date`` exactly as delivered so that a malformed value can be
carried through and excluded from analysis instead of rejected at the
boundary.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, field_validator

from spendlens_core.exceptions import InvalidTimeRangeError

ISO_DATE_FORMAT = "%Y-%m-%d"
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TimeRange(str, Enum):
    """Range selector for the analytics dashboard."""

    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_YEAR = "1y"

    @property
    def offset(self) -> relativedelta:
        """How far the window start lies before ``now``.

        The yearly range is a calendar-year step, so 2024-03-15 maps to
        2023-03-15 and a leap day maps to February 28th.
        """
        return _RANGE_OFFSETS[self]

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Union["TimeRange", str]) -> "TimeRange":
        """Resolve a selector value, rejecting anything outside the enumeration.

        Raises:
            InvalidTimeRangeError: If ``value`` is not a supported selector.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTimeRangeError(value, allowed=cls.choices()) from None


_RANGE_OFFSETS = {
    TimeRange.LAST_7_DAYS: relativedelta(days=7),
    TimeRange.LAST_30_DAYS: relativedelta(days=30),
    TimeRange.LAST_90_DAYS: relativedelta(days=90),
    TimeRange.LAST_YEAR: relativedelta(years=1),
}


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string, returning None when it is not a date.

    The whole string must match: surrounding whitespace and unpadded
    fields such as ``2024-3-1`` are rejected.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        return None


class Expense(BaseModel):
    """A single expense as delivered by the persistence gateway.

    ``date`` is the calendar day the expense occurred on, distinct from the
    ``created_at`` / ``updated_at`` bookkeeping timestamps which the engine
    ignores.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "exp_01",
                    "title": "Coffee",
                    "amount": "5.00",
                    "category": "Food & Dining",
                    "date": "2024-03-10",
                    "createdAt": "2024-03-10T08:12:44Z",
                    "updatedAt": "2024-03-10T08:12:44Z",
                }
            ]
        },
    )

    id: str = Field(description="Opaque unique identifier")
    title: str = Field(min_length=1, description="Display title")
    amount: Decimal = Field(description="Amount in currency units")
    category: str = Field(
        min_length=1,
        description="Free-form category label; unknown labels are accepted",
    )
    date: str
    description: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_to_decimal(cls, v):
        """Coerce string and float amounts to Decimal without binary noise."""
        if isinstance(v, float):
            return Decimal(str(v))
        if isinstance(v, str):
            try:
                return Decimal(v.strip())
            except InvalidOperation:
                raise ValueError(f"Invalid amount: {v!r}") from None
        return v

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date_to_iso(cls, v):
        """Accept date objects from callers that already parsed the column."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        return v

    @property
    def occurred_on(self) -> Optional[date]:
        """The parsed expense date, or None if ``date`` is malformed."""
        return parse_iso_date(self.date)

    @property
    def has_valid_date(self) -> bool:
        return self.occurred_on is not None
