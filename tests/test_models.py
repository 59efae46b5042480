"""Tests for expense and analytics models."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from spendlens_core import Expense, InvalidTimeRangeError, TimeRange, TimeWindow
from spendlens_core.models import AnalyticsStep, PeriodTotals, parse_iso_date


class TestTimeRange:
    def test_values(self):
        assert TimeRange.choices() == ["7d", "30d", "90d", "1y"]

    def test_is_string_enum(self):
        assert TimeRange.LAST_YEAR == "1y"
        assert isinstance(TimeRange.LAST_7_DAYS, str)

    def test_parse_accepts_members_and_values(self):
        assert TimeRange.parse("30d") is TimeRange.LAST_30_DAYS
        assert TimeRange.parse(TimeRange.LAST_90_DAYS) is TimeRange.LAST_90_DAYS

    @pytest.mark.parametrize("value", ["7D", "1w", "", None, 7])
    def test_parse_rejects_anything_else(self, value):
        with pytest.raises(InvalidTimeRangeError) as exc_info:
            TimeRange.parse(value)

        assert exc_info.value.allowed == ["7d", "30d", "90d", "1y"]


class TestExpense:
    """Tests for the Expense model."""

    def test_create_expense(self):
        expense = Expense(
            id="exp_1",
            title="Coffee",
            amount=Decimal("5.00"),
            category="Food & Dining",
            date="2024-03-10",
        )

        assert expense.amount == Decimal("5.00")
        assert expense.occurred_on == date(2024, 3, 10)
        assert expense.has_valid_date
        assert expense.description is None

    def test_accepts_camel_case_timestamps(self):
        expense = Expense.model_validate(
            {
                "id": "exp_2",
                "title": "Lunch",
                "amount": 12.5,
                "category": "Food",
                "date": "2024-03-11",
                "createdAt": "2024-03-11T12:00:00Z",
                "updatedAt": "2024-03-11T12:05:00Z",
            }
        )

        assert expense.created_at == "2024-03-11T12:00:00Z"
        assert expense.updated_at == "2024-03-11T12:05:00Z"

    def test_float_amount_is_coerced_exactly(self):
        expense = Expense(id="e", title="t", amount=0.1, category="c", date="2024-01-01")

        assert expense.amount == Decimal("0.1")

    def test_string_amount(self):
        expense = Expense(id="e", title="t", amount=" 19.99 ", category="c", date="2024-01-01")

        assert expense.amount == Decimal("19.99")

    def test_invalid_amount_string_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            Expense(id="e", title="t", amount="lots", category="c", date="2024-01-01")

    def test_date_objects_are_stored_as_iso(self):
        from_date = Expense(id="e", title="t", amount=1, category="c", date=date(2024, 3, 1))
        from_datetime = Expense(
            id="e", title="t", amount=1, category="c", date=datetime(2024, 3, 1, 18, 45)
        )

        assert from_date.date == "2024-03-01"
        assert from_datetime.date == "2024-03-01"

    def test_malformed_date_is_kept_but_unparsed(self):
        expense = Expense(id="e", title="t", amount=1, category="c", date="31/02/2024")

        assert expense.date == "31/02/2024"
        assert expense.occurred_on is None
        assert not expense.has_valid_date

    def test_empty_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            Expense(id="e", title="", amount=1, category="c", date="2024-01-01")

    def test_is_immutable(self):
        expense = Expense(id="e", title="t", amount=1, category="c", date="2024-01-01")

        with pytest.raises(PydanticValidationError):
            expense.amount = Decimal("2")


class TestParseIsoDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-02-29", date(2024, 2, 29)),
            ("2023-02-29", None),
            ("2024-03-10T10:00:00Z", None),
            ("2024-3-1", None),
            (" 2024-03-10 ", None),
            ("2024-03-10\n", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_iso_date(value) == expected


class TestTimeWindow:
    def test_end_before_start_rejected(self):
        with pytest.raises(PydanticValidationError):
            TimeWindow(start=datetime(2024, 3, 15), end=datetime(2024, 3, 1))

    def test_half_open_membership(self):
        window = TimeWindow(start=datetime(2024, 3, 8), end=datetime(2024, 3, 15))

        assert window.contains(datetime(2024, 3, 8))
        assert window.contains(datetime(2024, 3, 14, 23, 59))
        assert not window.contains(datetime(2024, 3, 15))
        assert window.contains_day(date(2024, 3, 8))
        assert not window.contains_day(date(2024, 3, 15))

    def test_overlaps(self):
        a = TimeWindow(start=datetime(2024, 3, 1), end=datetime(2024, 3, 8))
        b = TimeWindow(start=datetime(2024, 3, 8), end=datetime(2024, 3, 15))
        c = TimeWindow(start=datetime(2024, 3, 7), end=datetime(2024, 3, 9))

        assert not a.overlaps(b)
        assert a.overlaps(c)
        assert b.overlaps(c)


class TestPeriodTotals:
    def test_guards(self):
        totals = PeriodTotals(total=Decimal("100"), previous_period_total=Decimal("0"), count=0)

        assert totals.avg_per_expense == Decimal("0")
        assert totals.period_growth == Decimal("0")

    def test_computed_fields_are_serialized(self):
        totals = PeriodTotals(total=Decimal("30"), previous_period_total=Decimal("20"), count=3)

        dumped = totals.model_dump()

        assert dumped["avg_per_expense"] == Decimal("10")
        assert dumped["period_growth"] == Decimal("50")


class TestAnalyticsStep:
    def test_notes_optional(self):
        step = AnalyticsStep(step="total", input_value="2 expenses", output_value="45.00")

        assert step.notes is None
