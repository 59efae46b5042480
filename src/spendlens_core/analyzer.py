"""Spending analytics for the expense dashboard.

SpendingAnalyzer turns an unordered set of expense records, a range selector
and a reference instant into one AnalyticsSummary:

1. Resolve the current window and the comparison window before it
2. Partition the records into current, comparison and this-month views
3. Aggregate totals, average per expense and period growth
4. Break the current window down by category and rank the top categories
5. Bucket the current window into a daily or weekly trend

Every step is recorded in the analyzer's audit log and logged. The analyzer
keeps no state between calls apart from that log, which is reset on each
call: identical inputs always produce an equal summary.
"""

from datetime import date, datetime
from typing import Iterable, Optional, Union

import structlog

from spendlens_core.aggregation import compute_period_totals
from spendlens_core.categories import build_category_breakdown, rank_categories
from spendlens_core.config import AnalyticsConfig, load_config
from spendlens_core.filters import ExpensePartition, partition_expenses
from spendlens_core.interfaces import AnalyticsEventSink, LoggingEventSink
from spendlens_core.models import (
    AnalyticsEvent,
    AnalyticsStep,
    AnalyticsSummary,
    Expense,
    TimeRange,
)
from spendlens_core.trend import build_trend
from spendlens_core.windows import resolve_windows

logger = structlog.get_logger()


class SpendingAnalyzer:
    """
    Compute dashboard spending analytics from expense records.

    The reference instant is always injectable; the system clock is read
    only when the caller omits it.
    """

    def __init__(
        self,
        config: Optional[AnalyticsConfig] = None,
        event_sink: Optional[AnalyticsEventSink] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Engine configuration (default: loaded from environment)
            event_sink: Receiver for the per-summary observability event
                (default: a structured log line)
        """
        self.config = config or load_config()
        self.event_sink = event_sink if event_sink is not None else LoggingEventSink()
        self._audit_log: list[AnalyticsStep] = []

    @property
    def audit_log(self) -> list[AnalyticsStep]:
        """Steps recorded by the most recent ``analyze`` call."""
        return list(self._audit_log)

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        self._audit_log.append(
            AnalyticsStep(
                step=step,
                input_value=input_value,
                output_value=output_value,
                notes=notes,
            )
        )
        logger.info(
            "analytics_step",
            step=step,
            input=input_value,
            output=output_value,
        )

    def analyze(
        self,
        expenses: Iterable[Expense],
        time_range: Optional[Union[TimeRange, str]] = None,
        now: Optional[Union[date, datetime]] = None,
    ) -> AnalyticsSummary:
        """
        Compute the analytics summary for one set of inputs.

        Args:
            expenses: Expense records in any order; they are not modified
            time_range: Range selector (default: ``config.default_time_range``)
            now: Reference instant (default: the current local time)

        Returns:
            AnalyticsSummary for the current window

        Raises:
            InvalidTimeRangeError: If ``time_range`` is not 7d, 30d, 90d or 1y
            ValidationError: If ``now`` is neither a date nor a datetime
        """
        self._audit_log = []
        records = list(expenses)
        selector = TimeRange.parse(
            time_range if time_range is not None else self.config.default_time_range
        )
        reference = now if now is not None else datetime.now()

        # Step 1: Windows
        windows = resolve_windows(selector, reference)
        self._log_step(
            step="resolve_windows",
            input_value=f"time_range={selector.value}, now={windows.current.end.isoformat()}",
            output_value=(
                f"current=[{windows.current.start.isoformat()}, {windows.current.end.isoformat()}), "
                f"previous=[{windows.previous.start.isoformat()}, {windows.previous.end.isoformat()})"
            ),
        )

        # Step 2: Filter
        partition = partition_expenses(records, windows)
        self._log_step(
            step="partition_expenses",
            input_value=f"{len(records)} expenses",
            output_value=(
                f"current={len(partition.current)}, previous={len(partition.previous)}, "
                f"this_month={len(partition.this_month)}"
            ),
            notes=(
                f"{partition.malformed} expenses with malformed dates excluded"
                if partition.malformed
                else None
            ),
        )

        # Step 3: Totals
        totals = compute_period_totals(
            partition.current, partition.previous, partition.this_month
        )
        self._log_step(
            step="total",
            input_value=f"{totals.count} expenses in current window",
            output_value=str(totals.total),
        )
        self._log_step(
            step="avg_per_expense",
            input_value=f"{totals.total} / {totals.count}",
            output_value=str(totals.avg_per_expense),
            notes="No expenses in window" if totals.count == 0 else None,
        )
        self._log_step(
            step="period_growth",
            input_value=f"({totals.total} - {totals.previous_period_total}) / {totals.previous_period_total}",
            output_value=str(totals.period_growth),
            notes="No baseline in comparison window" if totals.previous_period_total == 0 else None,
        )

        # Step 4: Categories
        breakdown = build_category_breakdown(partition.current)
        top_categories = rank_categories(breakdown, self.config.top_category_limit)
        self._log_step(
            step="category_breakdown",
            input_value=f"{len(breakdown)} categories",
            output_value=", ".join(f"{c}={a}" for c, a in top_categories),
        )

        # Step 5: Trend
        daily_trend = build_trend(
            partition.current, windows.current, self.config.trend_settings
        )
        self._log_step(
            step="daily_trend",
            input_value=f"{windows.current.first_day} .. {windows.current.last_day}",
            output_value=f"{len(daily_trend)} buckets",
            notes="weekly" if any(b.is_weekly for b in daily_trend) else "daily",
        )

        summary = AnalyticsSummary(
            total=totals.total,
            this_month=totals.this_month,
            previous_period_total=totals.previous_period_total,
            avg_per_expense=totals.avg_per_expense,
            period_growth=totals.period_growth,
            count=totals.count,
            category_breakdown=breakdown,
            top_categories=top_categories,
            daily_trend=daily_trend,
            time_range=selector,
            window=windows,
            generated_at=windows.current.end,
        )

        self._emit_event(summary, records, partition)
        return summary

    def _emit_event(
        self,
        summary: AnalyticsSummary,
        records: list[Expense],
        partition: ExpensePartition,
    ) -> None:
        """Hand the summary's key figures to the event sink, if enabled.

        A failing sink is logged and otherwise ignored.
        """
        if not self.config.emit_events:
            return

        event = AnalyticsEvent(
            time_range=summary.time_range,
            total_expenses=len(records),
            filtered_expenses=summary.count,
            malformed_expenses=partition.malformed,
            total_amount=summary.total,
            this_month_amount=summary.this_month,
            period_growth=summary.period_growth,
            top_categories_count=len(summary.top_categories),
            occurred_at=summary.generated_at,
        )
        try:
            self.event_sink.emit(event)
        except Exception as e:
            logger.warning(
                "analytics_event_emit_failed",
                sink=type(self.event_sink).__name__,
                error=str(e),
            )


def compute_analytics(
    expenses: Iterable[Expense],
    time_range: Optional[Union[TimeRange, str]] = None,
    now: Optional[Union[date, datetime]] = None,
    config: Optional[AnalyticsConfig] = None,
) -> AnalyticsSummary:
    """Compute a summary with a one-off analyzer."""
    return SpendingAnalyzer(config=config).analyze(expenses, time_range=time_range, now=now)
