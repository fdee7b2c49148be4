"""
Fire-and-forget analytics events.

Tracking is best-effort: a failing sink is logged and otherwise ignored.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from ._rate_limited_log import rate_limited_log

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsEvent:
    category: str
    action: str
    label: Optional[str] = None


class AnalyticsSink(Protocol):
    """Protocol for analytics backends"""

    def track(self, event: AnalyticsEvent) -> None:
        ...


TX_DETAILS_EVENT = AnalyticsEvent(category="modals", action="Transaction details")


def track_event(sink: Optional[AnalyticsSink], event: AnalyticsEvent) -> None:
    """Send `event` to `sink` without ever raising."""
    if sink is None:
        return
    try:
        sink.track(event)
    except Exception as e:
        rate_limited_log(
            f"Analytics sink failed for {event.category}/{event.action}: {e}",
            level="debug",
            logger_instance=logger
        )


def track_details_toggle(sink: Optional[AnalyticsSink], expanded: bool) -> None:
    """Record that the advanced transaction details were opened or closed."""
    track_event(sink, replace(TX_DETAILS_EVENT, label="Open" if expanded else "Close"))
