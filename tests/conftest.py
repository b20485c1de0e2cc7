"""Pytest fixtures."""

import asyncio
import io
import json

import pytest

from apps.mcp_server.dispatcher import ProtocolDispatcher
from apps.mcp_server.resources import ResourceCatalog
from apps.mcp_server.transport import StdioTransport
from demo_config.settings import Settings
from demo_integrations.usage import InMemoryUsageRecorder
from demo_tools.adapters import register_default_tools
from demo_tools.registry import ToolRegistry


@pytest.fixture
def workspace(tmp_path):
    """Workspace root with a small file tree."""
    (tmp_path / "hello.txt").write_text("Hello, world!", encoding="utf-8")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "notes.md").write_text("# Notes\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(workspace):
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, WORKSPACE_ROOT=str(workspace))


@pytest.fixture
def registry(workspace):
    """Registry with the built-in tools."""
    registry = ToolRegistry()
    register_default_tools(registry, workspace_root=str(workspace))
    return registry


@pytest.fixture
def usage_recorder():
    return InMemoryUsageRecorder()


@pytest.fixture
def dispatcher(settings, registry, usage_recorder):
    """Dispatcher that has not seen the handshake yet."""
    return ProtocolDispatcher(
        settings=settings,
        registry=registry,
        resources=ResourceCatalog(registry.get("system_info")),
        usage_recorder=usage_recorder,
    )


@pytest.fixture
def handshake():
    """Run initialize + initialized against a dispatcher."""

    async def _handshake(dispatcher, protocol_version="2024-11-05"):
        response = await dispatcher.handle_message(
            {
                "jsonrpc": "2.0",
                "id": 0,
                "method": "initialize",
                "params": {
                    "protocolVersion": protocol_version,
                    "capabilities": {},
                    "clientInfo": {"name": "pytest", "version": "0.0.0"},
                },
            }
        )
        await dispatcher.handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"})
        return response

    return _handshake


@pytest.fixture
def stdio():
    """Build an in-memory transport preloaded with inbound lines.

    Must be called from inside a running event loop (async test body).
    """

    def _make(*messages, max_line_bytes=64 * 1024):
        reader = asyncio.StreamReader(limit=max_line_bytes)
        for message in messages:
            line = message if isinstance(message, str) else json.dumps(message)
            reader.feed_data(line.encode("utf-8") + b"\n")
        reader.feed_eof()
        out = io.StringIO()
        transport = StdioTransport(reader=reader, stdout=out, max_line_bytes=max_line_bytes)
        return transport, out

    return _make


def call_tool_request(request_id, name, arguments):
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }


@pytest.fixture
def call_request():
    """Factory for tools/call requests."""
    return call_tool_request
