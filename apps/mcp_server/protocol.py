"""JSON-RPC 2.0 message contracts and MCP result helpers."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"

# ============================================================================
# ERROR CODES
# ============================================================================

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_NOT_INITIALIZED = -32002


class JsonRpcError(Exception):
    """Protocol-level failure, answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        error = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


# ============================================================================
# MESSAGES
# ============================================================================


class JsonRpcRequest(BaseModel):
    """Inbound request or notification."""

    model_config = ConfigDict(strict=True, extra="ignore")

    jsonrpc: Literal["2.0"]
    id: int | str | None = None
    method: str
    params: Any = None

    @property
    def is_notification(self) -> bool:
        # A request with "id": null is still a request
        return "id" not in self.model_fields_set


class InitializeParams(BaseModel):
    """Params of the initialize request."""

    model_config = ConfigDict(extra="ignore")

    protocol_version: str | None = Field(None, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: dict[str, Any] | None = Field(None, alias="clientInfo")


class CallToolParams(BaseModel):
    """Params of tools/call."""

    model_config = ConfigDict(strict=True, extra="ignore")

    name: str
    # Left untyped: a non-object value is a validation error reported in the envelope
    arguments: Any = None


class ReadResourceParams(BaseModel):
    """Params of resources/read."""

    model_config = ConfigDict(strict=True, extra="ignore")

    uri: str


def success_response(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, error: JsonRpcError) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


# ============================================================================
# CONTENT
# ============================================================================


def text_content(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


def error_envelope(message: str) -> dict[str, Any]:
    """Tool-level failure delivered inside a successful response."""
    return {"content": [text_content(f"Error: {message}")], "isError": True}
