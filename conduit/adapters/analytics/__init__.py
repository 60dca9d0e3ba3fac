"""Analytics adapters."""

from conduit.adapters.analytics.fake import FakeAnalyticsTracker
from conduit.adapters.analytics.posthog import PostHogTracker

__all__ = [
    "FakeAnalyticsTracker",
    "PostHogTracker",
]
