"""Shared fixtures for spendlens-core tests."""

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from spendlens_core import AnalyticsConfig, Expense
from spendlens_core.interfaces import CollectingEventSink

REFERENCE_DAY = date(2024, 3, 15)

_ids = count(1)


def make_expense(
    title: str = "Expense",
    amount: str = "10.00",
    category: str = "Other",
    on: str = "2024-03-10",
    description: str = None,
) -> Expense:
    """Build an expense with a unique id."""
    return Expense(
        id=f"exp_{next(_ids)}",
        title=title,
        amount=Decimal(amount),
        category=category,
        date=on,
        description=description,
    )


@pytest.fixture
def now() -> date:
    return REFERENCE_DAY


@pytest.fixture
def sink() -> CollectingEventSink:
    return CollectingEventSink()


@pytest.fixture
def config() -> AnalyticsConfig:
    return AnalyticsConfig()


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Two expenses in the 7d window ending 2024-03-15, one in the window before."""
    return [
        make_expense("Coffee", "5.00", "Food", "2024-03-10"),
        make_expense("Gas", "40.00", "Transport", "2024-03-12"),
        make_expense("Book", "15.00", "Other", "2024-03-03"),
    ]
