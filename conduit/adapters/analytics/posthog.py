"""PostHog analytics tracker adapter."""

import logging
from typing import Any, Dict, Optional

import posthog

from conduit.core.config import Environment, Settings

logger = logging.getLogger(__name__)


def _should_send(settings: Settings) -> bool:
    # Local runs never report, even with a key configured.
    return bool(
        settings.ANALYTICS_ENABLED
        and settings.POSTHOG_API_KEY
        and settings.ENVIRONMENT != Environment.LOCAL
    )


class PostHogTracker:
    """Forwards OAuth usage events to PostHog.

    Every event carries the environment and API URL of the deployment
    that emitted it. Errors raised by the SDK are logged here and never
    reach the caller.
    """

    def __init__(self, settings: Settings) -> None:
        """Point the PostHog SDK at the configured project."""
        self._enabled = _should_send(settings)
        self._deployment = {
            "environment": settings.ENVIRONMENT.value,
            "api_url": settings.api_url,
        }

        if not self._enabled:
            logger.info("PostHog tracking off (env=%s)", settings.ENVIRONMENT.value)
            return

        posthog.api_key = settings.POSTHOG_API_KEY
        posthog.host = settings.POSTHOG_HOST
        logger.info("PostHog tracking on (env=%s)", settings.ENVIRONMENT.value)

    @property
    def enabled(self) -> bool:
        """Whether events are forwarded to PostHog."""
        return self._enabled

    def track(
        self,
        event_name: str,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None:
        """Capture one event. Caller properties override deployment ones."""
        if not self._enabled:
            return

        event_properties = dict(self._deployment)
        event_properties.update(properties or {})
        try:
            posthog.capture(
                distinct_id=distinct_id,
                event=event_name,
                properties=event_properties,
                groups=groups or {},
            )
        except Exception as e:
            logger.error("PostHog rejected event '%s' for %s: %s", event_name, distinct_id, e)
