"""
MCP Server Demo - stdio entry point.

Wires settings, logging, tools, resources and the usage recorder into a
ProtocolDispatcher and serves a single client over stdin/stdout until end of
input or SIGINT/SIGTERM.

Exit codes:
    0  graceful shutdown (EOF or signal)
    1  startup failure (bad settings, stdin closed or unreadable)
"""

import asyncio
import signal
import sys

from pydantic import ValidationError

from demo_config.settings import Settings
from demo_integrations.google_adk import build_usage_recorder
from demo_obs.logging import get_logger, setup_logging
from demo_tools.adapters import register_default_tools
from demo_tools.adapters.system import SystemInfoTool
from demo_tools.registry import ToolRegistry

from .dispatcher import ProtocolDispatcher
from .resources import ResourceCatalog
from .transport import StdioTransport, TransportError

logger = get_logger(__name__)


class StartupError(RuntimeError):
    """Server could not be brought up."""


def build_dispatcher(
    settings: Settings,
    transport: StdioTransport | None = None,
) -> ProtocolDispatcher:
    """Build a dispatcher with the default tools, resources and recorder."""
    registry = ToolRegistry()
    register_default_tools(registry, workspace_root=settings.WORKSPACE_ROOT or None)

    system_info = registry.get("system_info")
    resources = ResourceCatalog(system_info if isinstance(system_info, SystemInfoTool) else None)

    return ProtocolDispatcher(
        settings=settings,
        registry=registry,
        resources=resources,
        usage_recorder=build_usage_recorder(settings),
        transport=transport
        or StdioTransport(max_line_bytes=settings.TRANSPORT_MAX_LINE_BYTES),
    )


def _install_signal_handlers(dispatcher: ProtocolDispatcher) -> None:
    loop = asyncio.get_running_loop()

    def signal_handler(sig: signal.Signals) -> None:
        logger.info("signal_received", signal=sig.name)
        dispatcher.shutdown()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, signal_handler, sig)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no add_signal_handler
            signal.signal(
                sig,
                lambda s, f: loop.call_soon_threadsafe(signal_handler, signal.Signals(s)),
            )


async def main(settings: Settings) -> None:
    """Serve one MCP session over stdio."""
    dispatcher = build_dispatcher(settings)

    try:
        await dispatcher.transport.connect()
    except TransportError as e:
        raise StartupError(str(e)) from e

    _install_signal_handlers(dispatcher)

    logger.info(
        "mcp_server_started",
        server=settings.SERVER_NAME,
        version=settings.SERVER_VERSION,
        workspace=str(dispatcher.registry.get("file_operations").workspace_root),
    )

    await dispatcher.serve()
    logger.info("mcp_server_stopped")


def run() -> None:
    """Console script entry point."""
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Failed to start server: invalid settings: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings)

    try:
        asyncio.run(main(settings))
    except StartupError as e:
        print(f"Failed to start server: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("mcp_server_interrupted")
        sys.exit(0)


if __name__ == "__main__":
    run()
