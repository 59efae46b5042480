"""Totals, average and period-over-period growth."""

from decimal import Decimal
from typing import Iterable

from spendlens_core.models import Expense, PeriodTotals


def sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    """Sum expense amounts; an empty collection sums to 0."""
    return sum((e.amount for e in expenses), Decimal("0"))


def compute_period_totals(
    current: Iterable[Expense],
    previous: Iterable[Expense],
    this_month: Iterable[Expense],
) -> PeriodTotals:
    """Aggregate the three filtered views of a record set.

    Args:
        current: Expenses in the current window.
        previous: Expenses in the comparison window.
        this_month: Expenses in the calendar month of the reference instant.

    Returns:
        PeriodTotals whose ``avg_per_expense`` and ``period_growth`` are 0
        when there is nothing to divide by.
    """
    current = list(current)
    return PeriodTotals(
        total=sum_amounts(current),
        this_month=sum_amounts(this_month),
        previous_period_total=sum_amounts(previous),
        count=len(current),
    )
