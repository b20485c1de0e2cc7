"""Optional integrations (usage analytics)."""

from demo_integrations.google_adk import (
    GoogleADKIntegration,
    GoogleADKNotEnabledError,
    build_usage_recorder,
)
from demo_integrations.usage import (
    InMemoryUsageRecorder,
    NullUsageRecorder,
    ToolUsageLog,
    UsageRecorder,
)

__all__ = [
    "GoogleADKIntegration",
    "GoogleADKNotEnabledError",
    "build_usage_recorder",
    "InMemoryUsageRecorder",
    "NullUsageRecorder",
    "ToolUsageLog",
    "UsageRecorder",
]
