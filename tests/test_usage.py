"""Usage analytics integration tests."""

import pytest

from demo_config.settings import Settings
from demo_integrations import (
    GoogleADKIntegration,
    GoogleADKNotEnabledError,
    InMemoryUsageRecorder,
    NullUsageRecorder,
    build_usage_recorder,
)


@pytest.mark.asyncio
async def test_in_memory_recorder_appends_entries():
    recorder = InMemoryUsageRecorder()

    await recorder.log_tool_usage("calculator", {"a": 1}, {"success": True}, duration_ms=1.5)
    await recorder.log_tool_usage("system_info", {}, {"success": True})

    assert [log.tool_name for log in recorder.logs] == ["calculator", "system_info"]
    assert recorder.logs[0].duration == 1.5
    assert recorder.logs[1].duration is None
    assert recorder.logs[0].timestamp.tzinfo is not None


@pytest.mark.asyncio
async def test_usage_stats_breakdown_and_recent_calls():
    recorder = InMemoryUsageRecorder(recent_calls=2)
    for name in ("calculator", "calculator", "file_operations"):
        await recorder.log_tool_usage(name, {}, {"success": True})

    stats = recorder.get_usage_stats()

    assert stats["totalCalls"] == 3
    assert stats["toolBreakdown"] == {"calculator": 2, "file_operations": 1}
    assert [call["toolName"] for call in stats["recentCalls"]] == ["calculator", "file_operations"]


@pytest.mark.asyncio
async def test_null_recorder_is_inert():
    assert await NullUsageRecorder().log_tool_usage("calculator", {}, {}) is None


def test_build_usage_recorder_disabled_by_default():
    settings = Settings(_env_file=None, GOOGLE_ADK_ENABLED="false")
    assert isinstance(build_usage_recorder(settings), NullUsageRecorder)


def test_build_usage_recorder_enabled():
    settings = Settings(_env_file=None, GOOGLE_ADK_ENABLED="true", USAGE_RECENT_CALLS=3)
    recorder = build_usage_recorder(settings)
    assert isinstance(recorder, GoogleADKIntegration)
    assert recorder.enabled is True
    assert recorder.recent_calls == 3


@pytest.mark.asyncio
async def test_fulfillment_when_enabled():
    integration = GoogleADKIntegration(enabled=True)
    response = await integration.handle_fulfillment_request({"queryResult": {}})
    assert response["fulfillmentText"] == "MCP Server Demo is ready"
    assert response["fulfillmentMessages"][0]["text"]["text"] == ["Hello from MCP Server Demo!"]


@pytest.mark.asyncio
async def test_fulfillment_when_disabled():
    integration = GoogleADKIntegration(enabled=False)
    with pytest.raises(GoogleADKNotEnabledError, match="not enabled"):
        await integration.handle_fulfillment_request({})
