"""Analytics result models.

Everything in this module is a derived, throwaway value: the engine builds a
fresh set of these on every call and never mutates or persists them.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from spendlens_core.models.expense import TimeRange


def start_of_day(day: date) -> datetime:
    """Return the naive midnight instant that begins ``day``."""
    return datetime.combine(day, time.min)


class TimeWindow(BaseModel):
    """A half-open interval ``[start, end)`` of calendar time."""

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(description="Inclusive lower bound")
    end: datetime = Field(description="Exclusive upper bound")

    @field_validator("end")
    @classmethod
    def end_not_before_start(cls, v, info):
        """Validate that end is not before start."""
        if "start" in info.data and v < info.data["start"]:
            raise ValueError("end must be on or after start")
        return v

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return self.end.date()

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def contains_day(self, day: date) -> bool:
        """Whether the midnight that begins ``day`` falls inside the window."""
        return self.contains(start_of_day(day))

    def overlaps(self, other: "TimeWindow") -> bool:
        return self.start < other.end and other.start < self.end


class WindowPair(BaseModel):
    """The current window and its equal-length, immediately preceding twin."""

    model_config = ConfigDict(frozen=True)

    time_range: TimeRange
    current: TimeWindow
    previous: TimeWindow


class PeriodTotals(BaseModel):
    """Sums for the current window, the comparison window and this month.

    The average and growth figures are derived and guarded so that an empty
    window or a missing baseline yields 0 instead of a division error.
    """

    model_config = ConfigDict(frozen=True)

    total: Decimal = Field(default=Decimal("0"))
    this_month: Decimal = Field(default=Decimal("0"))
    previous_period_total: Decimal = Field(default=Decimal("0"))
    count: int = Field(default=0, ge=0)

    @computed_field
    @property
    def avg_per_expense(self) -> Decimal:
        """Average amount per expense in the current window."""
        if self.count == 0:
            return Decimal("0")
        return self.total / self.count

    @computed_field
    @property
    def period_growth(self) -> Decimal:
        """Percentage change against the comparison window."""
        if self.previous_period_total <= 0:
            return Decimal("0")
        return (
            (self.total - self.previous_period_total)
            / self.previous_period_total
            * Decimal("100")
        )


class CategoryTotal(NamedTuple):
    """A ``(category, amount)`` pair from the category ranking."""

    category: str
    amount: Decimal


class TrendBucket(BaseModel):
    """One point of the spending trend: a single day or a run of days."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    date: str
    amount: Decimal = Field(default=Decimal("0"))
    is_weekly: bool = Field(default=False)
    day_count: int = Field(default=1, ge=1)

    @property
    def first_day(self) -> date:
        return date.fromisoformat(self.date)


class AnalyticsSummary(BaseModel):
    """The engine's single output for one set of inputs."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total: Decimal
    this_month: Decimal
    previous_period_total: Decimal
    avg_per_expense: Decimal
    period_growth: Decimal
    count: int = Field(ge=0)
    category_breakdown: dict[str, Decimal] = Field(default_factory=dict)
    top_categories: list[CategoryTotal] = Field(default_factory=list)
    daily_trend: list[TrendBucket] = Field(default_factory=list)
    time_range: TimeRange
    window: WindowPair
    generated_at: datetime

    @property
    def is_weekly_trend(self) -> bool:
        return bool(self.daily_trend) and all(b.is_weekly for b in self.daily_trend)


class AnalyticsStep(BaseModel):
    """One recorded step of an analytics computation."""

    model_config = ConfigDict(frozen=True)

    step: str
    input_value: str
    output_value: str
    notes: Optional[str] = None


class AnalyticsEvent(BaseModel):
    """Advisory observability event emitted after a summary is computed."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(default="analytics_calculation_completed")
    time_range: TimeRange
    total_expenses: int = Field(ge=0)
    filtered_expenses: int = Field(ge=0)
    malformed_expenses: int = Field(default=0, ge=0)
    total_amount: Decimal
    this_month_amount: Decimal
    period_growth: Decimal
    top_categories_count: int = Field(ge=0)
    occurred_at: datetime

    def as_log_fields(self) -> dict:
        """Flatten the event for structured logging."""
        return {
            "time_range": self.time_range.value,
            "total_expenses": self.total_expenses,
            "filtered_expenses": self.filtered_expenses,
            "malformed_expenses": self.malformed_expenses,
            "total_amount": str(self.total_amount),
            "this_month_amount": str(self.this_month_amount),
            "period_growth": f"{self.period_growth:.1f}%",
            "top_categories_count": self.top_categories_count,
        }
