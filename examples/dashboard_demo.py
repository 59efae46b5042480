#!/usr/bin/env python3
"""
Spending Dashboard Demonstration

This script walks through the analytics a dashboard shows:
1. Build a set of sample expenses
2. Compute the summary for a range selector
3. Print the summary cards, top categories, trend and expense list

Run: python examples/dashboard_demo.py --range 90d --as-of 2024-03-15
"""

import argparse
from datetime import date, timedelta
from decimal import Decimal

from spendlens_core import AnalyticsSummary, Expense, SpendingAnalyzer, TimeRange
from spendlens_core.categories import category_share, list_categories
from spendlens_core.config import load_config
from spendlens_core.filters import filter_expenses, sort_expenses
from spendlens_core.logging_config import configure_logging
from spendlens_core.trend import TrendSettings

BAR_CELLS = 20


def create_sample_expenses(as_of: date) -> list[Expense]:
    """Create a few months of realistic expenses ending at ``as_of``."""
    recurring = [
        ("Rent", "1450.00", "Housing", 30),
        ("Groceries", "86.40", "Food & Dining", 6),
        ("Metro card", "33.00", "Transportation", 14),
        ("Streaming", "15.99", "Entertainment", 30),
        ("Electricity", "72.10", "Utilities", 30),
        ("Lunch", "14.75", "Food & Dining", 3),
    ]
    expenses = []
    for title, amount, category, every in recurring:
        for n, offset in enumerate(range(1, 200, every)):
            day = as_of - timedelta(days=offset)
            expenses.append(
                Expense(
                    id=f"{title.lower().replace(' ', '-')}-{n}",
                    title=title,
                    amount=Decimal(amount),
                    category=category,
                    date=day.isoformat(),
                )
            )

    # One-off purchases, including one with a date the gateway failed to normalize
    expenses.append(
        Expense(id="flight-1", title="Flight to Lisbon", amount=Decimal("389.00"),
                category="Travel", date=(as_of - timedelta(days=20)).isoformat(),
                description="Spring trip")
    )
    expenses.append(
        Expense(id="dentist-1", title="Dentist", amount=Decimal("120.00"),
                category="Healthcare", date="12/03/2024")
    )
    return expenses


def print_summary(summary: AnalyticsSummary, settings: TrendSettings) -> None:
    window = summary.window.current
    print(f"Range {summary.time_range.value}: {window.first_day} to {window.last_day}")
    print("-" * 60)
    print(f"  Total spent:         ${summary.total:,.2f}")
    print(f"  This month:          ${summary.this_month:,.2f}")
    print(f"  Expenses:            {summary.count}")
    print(f"  Average per expense: ${summary.avg_per_expense:,.2f}")
    arrow = "+" if summary.period_growth >= 0 else "-"
    print(f"  Vs previous period:  {arrow}{abs(summary.period_growth):.1f}%")

    print("\nTop categories")
    for category, amount in summary.top_categories:
        share = category_share(amount, summary.total)
        print(f"  {category:<18} ${amount:>10,.2f}  {share:5.1f}%")

    label = "Weekly" if summary.is_weekly_trend else "Daily"
    print(f"\n{label} trend")
    for bucket in summary.daily_trend:
        width = settings.bar_width(bucket.amount, summary.daily_trend)
        cells = int(width * BAR_CELLS / 100)
        prefix = "Week of " if bucket.is_weekly else ""
        print(f"  {prefix + bucket.date:<20} {'#' * cells:<{BAR_CELLS}} ${bucket.amount:,.2f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Spending dashboard demo")
    parser.add_argument("--range", default=None, choices=TimeRange.choices())
    parser.add_argument("--as-of", default=None, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--search", default="", help="Filter the expense list")
    parser.add_argument("--category", default="all", help="Category for the expense list")
    args = parser.parse_args()

    config = load_config()
    configure_logging(config)

    as_of = date.fromisoformat(args.as_of) if args.as_of else date.today()
    expenses = create_sample_expenses(as_of)

    analyzer = SpendingAnalyzer(config=config)
    summary = analyzer.analyze(expenses, time_range=args.range, now=as_of)
    print_summary(summary, config.trend_settings)

    print(f"\nCategories: {', '.join(list_categories(expenses))}")
    listing = sort_expenses(filter_expenses(expenses, args.search, args.category))
    print(f"Expense list ({len(listing)} shown, newest first)")
    for expense in listing[:10]:
        print(f"  {expense.date:<12} {expense.title:<20} ${expense.amount:>9,.2f}  {expense.category}")


if __name__ == "__main__":
    main()
