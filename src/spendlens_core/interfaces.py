"""Collaborator protocols for the analytics engine.

The engine reaches outside itself in exactly one place: after a summary is
computed it may hand an ``AnalyticsEvent`` to a telemetry sink. Sinks are
matched structurally via ``typing.Protocol``, so any object with an
``emit`` method works (an OpenTelemetry log bridge, a metrics counter, a
test double) without inheriting from anything here.

Example Usage:
    ```python
    class PrintSink:
        def emit(self, event: AnalyticsEvent) -> None:
            print(event.model_dump_json(by_alias=True))

    analyzer = SpendingAnalyzer(event_sink=PrintSink())
    ```
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from spendlens_core.models import AnalyticsEvent

logger = structlog.get_logger()


@runtime_checkable
class AnalyticsEventSink(Protocol):
    """Receives one event per computed summary. Advisory only."""

    def emit(self, event: AnalyticsEvent) -> None:
        ...


class LoggingEventSink:
    """Default sink: writes the event as a structured log line."""

    def emit(self, event: AnalyticsEvent) -> None:
        logger.info(event.name, **event.as_log_fields())


class CollectingEventSink:
    """Keeps every emitted event in memory."""

    def __init__(self) -> None:
        self.events: list[AnalyticsEvent] = []

    def emit(self, event: AnalyticsEvent) -> None:
        self.events.append(event)
