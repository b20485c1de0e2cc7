"""Tool usage recording.

The dispatcher reports every successful tool call to a UsageRecorder. The
recorder is chosen once at startup: NullUsageRecorder when analytics are off,
an in-memory recorder when they are on. Recorders only observe; they never
change what the client receives.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ToolUsageLog(BaseModel):
    """One recorded tool call."""

    model_config = ConfigDict(populate_by_name=True)

    tool_name: str = Field(..., alias="toolName")
    arguments: Any = None
    result: Any = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration: float | None = Field(None, description="Execution time in milliseconds")


class UsageRecorder(Protocol):
    """Observer of executed tool calls."""

    async def log_tool_usage(
        self,
        tool_name: str,
        arguments: Any,
        result: Any,
        duration_ms: float | None = None,
    ) -> None:
        ...


class NullUsageRecorder:
    """Recorder used when usage analytics are disabled."""

    async def log_tool_usage(
        self,
        tool_name: str,
        arguments: Any,
        result: Any,
        duration_ms: float | None = None,
    ) -> None:
        return None


class InMemoryUsageRecorder:
    """Append-only in-memory usage log."""

    def __init__(self, recent_calls: int = 10):
        self._logs: list[ToolUsageLog] = []
        self.recent_calls = recent_calls

    @property
    def logs(self) -> tuple[ToolUsageLog, ...]:
        return tuple(self._logs)

    async def log_tool_usage(
        self,
        tool_name: str,
        arguments: Any,
        result: Any,
        duration_ms: float | None = None,
    ) -> None:
        self._logs.append(
            ToolUsageLog(
                tool_name=tool_name,
                arguments=arguments,
                result=result,
                duration=duration_ms,
            )
        )

    def get_usage_stats(self) -> dict[str, Any]:
        """Summarise recorded calls.

        Returns:
            totalCalls, toolBreakdown (calls per tool) and recentCalls (the
            last `recent_calls` entries, oldest first)
        """
        breakdown = Counter(log.tool_name for log in self._logs)
        recent = self._logs[-self.recent_calls:] if self.recent_calls else []
        return {
            "totalCalls": len(self._logs),
            "toolBreakdown": dict(breakdown),
            "recentCalls": [log.model_dump(by_alias=True, mode="json") for log in recent],
        }
