"""Select expenses by window, by calendar month, and for the expense list.

Records whose ``date`` cannot be parsed are excluded from every window and
from the month filter. They are never an error: data quality upstream is
outside the engine's control, so the policy is to skip them and report how
many were skipped.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

import structlog

from spendlens_core.exceptions import ValidationError
from spendlens_core.models import Expense, TimeWindow, WindowPair

logger = structlog.get_logger()

ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class ExpensePartition:
    """Filtered views of one record set. A record may sit in several views."""

    current: tuple[Expense, ...] = field(default_factory=tuple)
    previous: tuple[Expense, ...] = field(default_factory=tuple)
    this_month: tuple[Expense, ...] = field(default_factory=tuple)
    malformed: int = 0


def in_window(expense: Expense, window: TimeWindow) -> bool:
    day = expense.occurred_on
    if day is None:
        return False
    return window.contains_day(day)


def in_month_of(expense: Expense, now: datetime) -> bool:
    day = expense.occurred_on
    if day is None:
        return False
    return day.year == now.year and day.month == now.month


def filter_in_window(
    expenses: Iterable[Expense], window: TimeWindow
) -> list[Expense]:
    """Return the expenses dated within ``[window.start, window.end)``."""
    return [e for e in expenses if in_window(e, window)]


def filter_in_month(expenses: Iterable[Expense], now: datetime) -> list[Expense]:
    """Return the expenses dated in the calendar month containing ``now``."""
    return [e for e in expenses if in_month_of(e, now)]


def count_malformed(expenses: Iterable[Expense]) -> int:
    return sum(1 for e in expenses if not e.has_valid_date)


def partition_expenses(
    expenses: Sequence[Expense], windows: WindowPair
) -> ExpensePartition:
    """Split a record set into current-window, comparison and this-month views.

    "This month" is the calendar month containing the end of the current
    window, i.e. the reference instant.
    """
    now = windows.current.end
    malformed = count_malformed(expenses)
    if malformed:
        logger.warning(
            "malformed_expense_dates_excluded",
            malformed=malformed,
            total=len(expenses),
        )

    return ExpensePartition(
        current=tuple(filter_in_window(expenses, windows.current)),
        previous=tuple(filter_in_window(expenses, windows.previous)),
        this_month=tuple(filter_in_month(expenses, now)),
        malformed=malformed,
    )


# =============================================================================
# EXPENSE LIST
# =============================================================================

class SortKey(str, Enum):
    """Columns the expense list can be sorted by."""

    DATE = "date"
    AMOUNT = "amount"
    TITLE = "title"

    @classmethod
    def parse(cls, value: Union["SortKey", str]) -> "SortKey":
        return _parse_choice(cls, value, "sort_by")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Union["SortOrder", str]) -> "SortOrder":
        return _parse_choice(cls, value, "order")


def _parse_choice(enum_cls, value, field_name: str):
    """Look up an enum member, raising ValidationError for unknown values."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Unsupported {field_name}: {value!r}",
            field=field_name,
            value=value,
            constraint=f"Must be one of: {allowed}",
        ) from None


def matches_search(expense: Expense, term: str) -> bool:
    """Case-insensitive substring match on title or description."""
    if not term:
        return True
    needle = term.lower()
    if needle in expense.title.lower():
        return True
    return bool(expense.description) and needle in expense.description.lower()


def filter_expenses(
    expenses: Iterable[Expense],
    search_term: str = "",
    category: Optional[str] = None,
) -> list[Expense]:
    """Filter the expense list by search term and category.

    ``category`` of None or ``"all"`` keeps every category.
    """
    keep_all = category is None or category == ALL_CATEGORIES
    return [
        e
        for e in expenses
        if matches_search(e, search_term) and (keep_all or e.category == category)
    ]


def sort_expenses(
    expenses: Iterable[Expense],
    sort_by: Union[SortKey, str] = SortKey.DATE,
    order: Union[SortOrder, str] = SortOrder.DESC,
) -> list[Expense]:
    """Sort the expense list; ties keep their input order.

    Expenses with a malformed date always sort after the dated ones when
    sorting by date, whatever the order.

    Raises:
        ValidationError: If ``sort_by`` or ``order`` is not a known value.
    """
    sort_by = SortKey.parse(sort_by)
    reverse = SortOrder.parse(order) == SortOrder.DESC
    items = list(expenses)

    if sort_by == SortKey.DATE:
        dated = [e for e in items if e.has_valid_date]
        undated = [e for e in items if not e.has_valid_date]
        dated.sort(key=lambda e: e.occurred_on, reverse=reverse)
        return dated + undated
    if sort_by == SortKey.AMOUNT:
        return sorted(items, key=lambda e: e.amount, reverse=reverse)
    return sorted(items, key=lambda e: e.title.lower(), reverse=reverse)
