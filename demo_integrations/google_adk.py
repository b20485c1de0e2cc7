"""Google ADK Integration.

Placeholder integration point for Google Actions: records tool usage for
analytics and answers fulfillment requests with a static message. Nothing is
sent anywhere; the usage log lives in memory for the process lifetime.
"""

from typing import Any

from demo_config.settings import Settings
from demo_obs.logging import get_logger

from .usage import InMemoryUsageRecorder, NullUsageRecorder, UsageRecorder

logger = get_logger(__name__)


class GoogleADKNotEnabledError(RuntimeError):
    """Fulfillment requested while the integration is disabled."""


class GoogleADKIntegration(InMemoryUsageRecorder):
    """Usage recorder with a Google Assistant fulfillment hook."""

    def __init__(self, enabled: bool = True, recent_calls: int = 10):
        super().__init__(recent_calls=recent_calls)
        self.enabled = enabled

        if self.enabled:
            logger.info("google_adk_integration_enabled")
        else:
            logger.info(
                "google_adk_integration_disabled",
                hint="set GOOGLE_ADK_ENABLED=true to enable",
            )

    async def handle_fulfillment_request(self, request: dict[str, Any]) -> dict[str, Any]:
        """Answer a Google Assistant fulfillment request.

        Raises:
            GoogleADKNotEnabledError: Integration is disabled
        """
        if not self.enabled:
            raise GoogleADKNotEnabledError("Google ADK integration is not enabled")

        logger.debug("google_adk_fulfillment_request", keys=sorted(request or {}))
        return {
            "fulfillmentText": "MCP Server Demo is ready",
            "fulfillmentMessages": [
                {"text": {"text": ["Hello from MCP Server Demo!"]}},
            ],
        }


def build_usage_recorder(settings: Settings) -> UsageRecorder:
    """Pick the usage recorder for this process."""
    if settings.usage_analytics_enabled:
        return GoogleADKIntegration(enabled=True, recent_calls=settings.USAGE_RECENT_CALLS)

    logger.info(
        "google_adk_integration_disabled",
        hint="set GOOGLE_ADK_ENABLED=true to enable",
    )
    return NullUsageRecorder()
