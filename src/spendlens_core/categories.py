"""Category breakdown and ranking for the current window.

Categories are opaque labels. The breakdown is keyed in the order each label
is first seen in the input, and the ranking is a stable sort on that order,
so categories with equal sums keep their first-seen order.
"""

from decimal import Decimal
from typing import Iterable, Mapping

from spendlens_core.models import CategoryTotal, Expense

DEFAULT_TOP_CATEGORIES = 5


def build_category_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Map each category present to the sum of its amounts."""
    breakdown: dict[str, Decimal] = {}
    for expense in expenses:
        breakdown[expense.category] = (
            breakdown.get(expense.category, Decimal("0")) + expense.amount
        )
    return breakdown


def rank_categories(
    breakdown: Mapping[str, Decimal], limit: int = DEFAULT_TOP_CATEGORIES
) -> list[CategoryTotal]:
    """Get the top ``limit`` categories by amount.

    Args:
        breakdown: Category totals in first-seen order.
        limit: Maximum number of categories to return.

    Returns:
        CategoryTotal pairs sorted by amount descending.
    """
    if limit <= 0:
        return []
    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category, amount) for category, amount in ranked[:limit]]


def category_share(amount: Decimal, total: Decimal) -> Decimal:
    """Percentage of ``total`` that ``amount`` represents, 0 if total is 0."""
    if total == 0:
        return Decimal("0")
    return amount / total * Decimal("100")


def list_categories(expenses: Iterable[Expense]) -> list[str]:
    """Distinct categories across all expenses, sorted alphabetically."""
    return sorted({e.category for e in expenses})
