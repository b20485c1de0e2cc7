"""Protocol Dispatcher.

Routes decoded JSON-RPC messages to the tool registry and resource catalog
and writes responses back through the transport.

Session states:
    uninitialized -> initialized -> closing -> closed

Tool-level failures (unknown tool, bad arguments, execution errors, unknown
resource) are answered with a successful response carrying `isError: true`.
Only malformed messages, unsupported methods and out-of-order requests get a
JSON-RPC error object.
"""

import json
import time
from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from demo_config.settings import Settings
from demo_integrations.usage import NullUsageRecorder, UsageRecorder
from demo_obs import metrics
from demo_obs.logging import bind_request_context, get_logger
from demo_tools.exceptions import ToolNotFoundError
from demo_tools.registry import ToolRegistry

from .protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_NOT_INITIALIZED,
    CallToolParams,
    InitializeParams,
    JsonRpcError,
    JsonRpcRequest,
    ReadResourceParams,
    error_envelope,
    error_response,
    success_response,
    text_content,
)
from .resources import ResourceCatalog, ResourceNotFoundError
from .transport import MessageParseError, StdioTransport

logger = get_logger(__name__)

INITIALIZED_NOTIFICATIONS = ("initialized", "notifications/initialized")


class ServerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    CLOSING = "closing"
    CLOSED = "closed"


def _request_id(message: dict[str, Any]) -> Any:
    request_id = message.get("id")
    if isinstance(request_id, (int, str)) and not isinstance(request_id, bool):
        return request_id
    return None


def _parse_params(model, params: Any):
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise JsonRpcError(INVALID_PARAMS, "Params must be an object")
    try:
        return model.model_validate(params)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise JsonRpcError(INVALID_PARAMS, f"Invalid params: {fields}") from e


class ProtocolDispatcher:
    """MCP request dispatcher for a single stdio session."""

    def __init__(
        self,
        settings: Settings,
        registry: ToolRegistry,
        resources: ResourceCatalog,
        usage_recorder: UsageRecorder | None = None,
        transport: StdioTransport | None = None,
    ):
        """Initialize dispatcher.

        Args:
            settings: Application settings (server identity, protocol versions)
            registry: Populated tool registry
            resources: Resource catalog
            usage_recorder: Observer of successful tool calls (default: no-op)
            transport: Channel used by serve()
        """
        self.settings = settings
        self.registry = registry
        self.resources = resources
        self.usage_recorder = usage_recorder or NullUsageRecorder()
        self.transport = transport or StdioTransport(
            max_line_bytes=settings.TRANSPORT_MAX_LINE_BYTES
        )
        self.state = ServerState.UNINITIALIZED
        self._initialize_answered = False
        self._client_info: dict[str, Any] | None = None

        self._handlers: dict[str, Callable[[Any, Any], Awaitable[dict[str, Any]]]] = {
            "initialize": self._handle_initialize,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
            "resources/list": self._handle_list_resources,
            "resources/read": self._handle_read_resource,
        }

    # ========================================================================
    # SESSION LOOP
    # ========================================================================

    async def serve(self) -> None:
        """Answer messages until end of input or shutdown()."""
        logger.info("mcp_dispatcher_serving", tools=self.registry.names())

        try:
            while self.state in (ServerState.UNINITIALIZED, ServerState.INITIALIZED):
                try:
                    message = await self.transport.receive()
                except MessageParseError as e:
                    logger.warning("mcp_message_parse_error", error=str(e))
                    metrics.protocol_requests_total.labels(method="<parse>", outcome="error").inc()
                    await self.transport.send(
                        error_response(None, JsonRpcError(PARSE_ERROR, "Parse error", str(e)))
                    )
                    continue

                if message is None:
                    logger.info("mcp_transport_eof")
                    break

                response = await self.handle_message(message)
                if response is not None:
                    await self.transport.send(response)
        finally:
            await self.close()

    def shutdown(self) -> None:
        """Stop serving after the current message (signal handler entry)."""
        if self.state in (ServerState.CLOSING, ServerState.CLOSED):
            return
        logger.info("mcp_dispatcher_closing", previous_state=self.state.value)
        self.state = ServerState.CLOSING
        self.transport.abort()

    async def close(self) -> None:
        """Release the transport. Idempotent."""
        if self.state is ServerState.CLOSED:
            return
        self.state = ServerState.CLOSING
        await self.transport.close()
        self.state = ServerState.CLOSED
        logger.info("mcp_dispatcher_closed")

    # ========================================================================
    # MESSAGE HANDLING
    # ========================================================================

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Handle one decoded message.

        Returns:
            Response to write, or None for notifications and stray responses
        """
        if not isinstance(message, dict):
            metrics.protocol_requests_total.labels(method="<invalid>", outcome="error").inc()
            return error_response(None, JsonRpcError(INVALID_REQUEST, "Invalid Request"))

        if "method" not in message and ("result" in message or "error" in message):
            # Response to a server->client request; this server never sends any
            logger.debug("mcp_unexpected_response_ignored", id=message.get("id"))
            return None

        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError:
            metrics.protocol_requests_total.labels(method="<invalid>", outcome="error").inc()
            return error_response(
                _request_id(message), JsonRpcError(INVALID_REQUEST, "Invalid Request")
            )

        if request.is_notification:
            self._handle_notification(request)
            method_label = (
                request.method if request.method in INITIALIZED_NOTIFICATIONS else "<unknown>"
            )
            metrics.protocol_requests_total.labels(
                method=method_label, outcome="notification"
            ).inc()
            return None

        try:
            with bind_request_context(request.method, request.id):
                result = await self._dispatch(request)
        except JsonRpcError as e:
            logger.warning(
                "mcp_request_rejected",
                method=request.method,
                id=request.id,
                code=e.code,
                error=e.message,
            )
            metrics.protocol_requests_total.labels(
                method=self._method_label(request.method), outcome="error"
            ).inc()
            return error_response(request.id, e)
        except Exception:
            logger.error(
                "mcp_request_crashed", method=request.method, id=request.id, exc_info=True
            )
            metrics.protocol_requests_total.labels(method=request.method, outcome="error").inc()
            return error_response(request.id, JsonRpcError(INTERNAL_ERROR, "Internal error"))

        metrics.protocol_requests_total.labels(method=request.method, outcome="ok").inc()
        return success_response(request.id, result)

    def _method_label(self, method: str) -> str:
        # Keep client-chosen method names out of metric labels
        return method if method in self._handlers else "<unknown>"

    async def _dispatch(self, request: JsonRpcRequest) -> dict[str, Any]:
        handler = self._handlers.get(request.method)
        if handler is None:
            raise JsonRpcError(METHOD_NOT_FOUND, f"Method not found: {request.method}")

        if request.method != "initialize" and self.state is not ServerState.INITIALIZED:
            raise JsonRpcError(SERVER_NOT_INITIALIZED, "Server not initialized")

        return await handler(request.params, request.id)

    def _handle_notification(self, request: JsonRpcRequest) -> None:
        if request.method not in INITIALIZED_NOTIFICATIONS:
            logger.debug("mcp_notification_ignored", method=request.method)
            return

        if not self._initialize_answered:
            logger.warning("mcp_initialized_before_initialize")
            return

        if self.state is ServerState.UNINITIALIZED:
            self.state = ServerState.INITIALIZED
            logger.info("mcp_session_initialized", client=self._client_info)

    # ========================================================================
    # HANDLERS
    # ========================================================================

    async def _handle_initialize(self, params: Any, request_id: Any) -> dict[str, Any]:
        if self._initialize_answered:
            raise JsonRpcError(INVALID_REQUEST, "Server already initialized")

        init = _parse_params(InitializeParams, params)
        supported = self.settings.supported_protocol_versions
        if init.protocol_version in supported:
            protocol_version = init.protocol_version
        else:
            protocol_version = self.settings.PROTOCOL_VERSION

        self._initialize_answered = True
        self._client_info = init.client_info
        logger.info(
            "mcp_initialize",
            requested_version=init.protocol_version,
            protocol_version=protocol_version,
            client=init.client_info,
        )

        return {
            "protocolVersion": protocol_version,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {
                "name": self.settings.SERVER_NAME,
                "version": self.settings.SERVER_VERSION,
            },
        }

    async def _handle_list_tools(self, params: Any, request_id: Any) -> dict[str, Any]:
        return {"tools": [definition.to_wire() for definition in self.registry.list()]}

    async def _handle_call_tool(self, params: Any, request_id: Any) -> dict[str, Any]:
        call = _parse_params(CallToolParams, params)
        return await self.call_tool(call.name, call.arguments, request_id=request_id)

    async def _handle_list_resources(self, params: Any, request_id: Any) -> dict[str, Any]:
        return {"resources": [resource.to_wire() for resource in self.resources.list()]}

    async def _handle_read_resource(self, params: Any, request_id: Any) -> dict[str, Any]:
        read = _parse_params(ReadResourceParams, params)
        try:
            contents = await self.resources.read(read.uri)
        except ResourceNotFoundError as e:
            logger.warning("resource_not_found", uri=read.uri)
            return error_envelope(str(e))
        return {"contents": contents}

    # ========================================================================
    # TOOL CALLS
    # ========================================================================

    async def call_tool(
        self, name: str, arguments: Any, request_id: Any = None
    ) -> dict[str, Any]:
        """Resolve, validate and execute a tool.

        Never raises for tool-level failures; they come back as an error
        envelope.
        """
        tool = self.registry.get(name)
        tool_label = name if tool is not None else "<unknown>"
        ctx = {"request_id": request_id}
        started = time.perf_counter()

        try:
            if tool is None:
                raise ToolNotFoundError(name)
            validated = tool.validate_arguments(arguments)
            result = await tool.execute(ctx, validated)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning(
                "tool_call_failed",
                tool=name,
                error=message,
                error_type=type(e).__name__,
                request_id=request_id,
            )
            metrics.tool_executions_total.labels(tool_name=tool_label, status="error").inc()
            return error_envelope(message)

        elapsed = time.perf_counter() - started
        metrics.tool_executions_total.labels(tool_name=name, status="success").inc()
        metrics.tool_execution_duration.labels(tool_name=name).observe(elapsed)
        logger.info(
            "tool_call_succeeded",
            tool=name,
            duration_ms=round(elapsed * 1000, 3),
            request_id=request_id,
        )

        payload = result.to_wire()
        await self._record_usage(name, validated, payload, elapsed * 1000)

        return {"content": [text_content(json.dumps(payload, indent=2))]}

    async def _record_usage(
        self, name: str, arguments: dict[str, Any], payload: dict[str, Any], duration_ms: float
    ) -> None:
        try:
            await self.usage_recorder.log_tool_usage(
                name, arguments, payload, duration_ms=duration_ms
            )
        except Exception:
            logger.warning("usage_recording_failed", tool=name, exc_info=True)
