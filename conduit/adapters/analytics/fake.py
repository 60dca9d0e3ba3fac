"""Fake analytics tracker for testing."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TrackedEvent:
    """One call to ``track`` as the fake saw it."""

    event_name: str
    distinct_id: str
    properties: Dict[str, Any] = field(default_factory=dict)
    groups: Optional[Dict[str, str]] = None


class FakeAnalyticsTracker:
    """AnalyticsTrackerProtocol double that keeps events in a list.

    ``seed_error`` turns the fake into a broken sink so callers can be
    checked for swallowing analytics failures::

        tracker = FakeAnalyticsTracker()
        tracker.seed_error(RuntimeError("posthog down"))
        await handler.get_source_oauth_consent(request)  # must still succeed
    """

    def __init__(self) -> None:
        self.events: List[TrackedEvent] = []
        self._error: Optional[Exception] = None

    def seed_error(self, error: Exception) -> None:
        self._error = error

    def track(
        self,
        event_name: str,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None:
        if self._error is not None:
            raise self._error
        self.events.append(TrackedEvent(event_name, distinct_id, dict(properties or {}), groups))

    def names(self) -> List[str]:
        """Event names in the order they were tracked."""
        return [event.event_name for event in self.events]

    def has(self, event_name: str) -> bool:
        return event_name in self.names()

    def get(self, event_name: str) -> TrackedEvent:
        """First event named ``event_name``; AssertionError if there is none."""
        matches = [event for event in self.events if event.event_name == event_name]
        if not matches:
            raise AssertionError(f"'{event_name}' was not tracked. Tracked: {self.names()}")
        return matches[0]

    def clear(self) -> None:
        self.events.clear()
