"""Entry point wiring tests."""

import io
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from apps.mcp_server import main as server_main
from apps.mcp_server.dispatcher import ServerState
from apps.mcp_server.main import StartupError, build_dispatcher
from apps.mcp_server.transport import StdioTransport, TransportError
from demo_config.settings import Settings
from demo_integrations import GoogleADKIntegration, NullUsageRecorder


class TestBuildDispatcher:
    def test_registers_default_tools(self, workspace):
        settings = Settings(_env_file=None, WORKSPACE_ROOT=str(workspace))
        dispatcher = build_dispatcher(settings, transport=StdioTransport(stdout=io.StringIO()))

        assert dispatcher.registry.names() == ["calculator", "file_operations", "system_info"]
        assert dispatcher.registry.get("file_operations").workspace_root == workspace.absolute()
        assert dispatcher.state is ServerState.UNINITIALIZED

    def test_usage_recorder_off_by_default(self):
        dispatcher = build_dispatcher(Settings(_env_file=None))
        assert isinstance(dispatcher.usage_recorder, NullUsageRecorder)

    def test_usage_recorder_enabled_by_flag(self):
        dispatcher = build_dispatcher(Settings(_env_file=None, GOOGLE_ADK_ENABLED="true"))
        assert isinstance(dispatcher.usage_recorder, GoogleADKIntegration)

    def test_transport_uses_configured_line_limit(self):
        dispatcher = build_dispatcher(Settings(_env_file=None, TRANSPORT_MAX_LINE_BYTES=2048))
        assert dispatcher.transport.max_line_bytes == 2048


@pytest.mark.asyncio
async def test_main_wraps_transport_failure():
    dispatcher = MagicMock()
    dispatcher.transport.connect = AsyncMock(side_effect=TransportError("stdin is closed"))

    with patch.object(server_main, "build_dispatcher", return_value=dispatcher):
        with pytest.raises(StartupError, match="stdin is closed"):
            await server_main.main(Settings(_env_file=None))

    dispatcher.serve.assert_not_called()


def test_run_exits_1_on_startup_error(capsys):
    with patch.object(server_main, "setup_logging"), patch.object(
        server_main, "main", AsyncMock(side_effect=StartupError("no stdin"))
    ):
        with pytest.raises(SystemExit) as exc_info:
            server_main.run()

    assert exc_info.value.code == 1
    assert "Failed to start server: no stdin" in capsys.readouterr().err


def test_run_exits_1_on_invalid_settings(monkeypatch, capsys):
    monkeypatch.setenv("TRANSPORT_MAX_LINE_BYTES", "1")

    with patch.object(server_main, "setup_logging") as setup_logging:
        with pytest.raises(SystemExit) as exc_info:
            server_main.run()

    assert exc_info.value.code == 1
    assert "invalid settings" in capsys.readouterr().err
    setup_logging.assert_not_called()


def test_run_returns_normally_after_session(monkeypatch):
    monkeypatch.delenv("GOOGLE_ADK_ENABLED", raising=False)
    serve = AsyncMock()

    with patch.object(server_main, "setup_logging"), patch.object(server_main, "main", serve):
        server_main.run()

    serve.assert_awaited_once()
