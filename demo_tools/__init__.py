"""MCP Server Demo Tool System.

Tool interface, schema validation and registry.
"""

from demo_tools.base import (
    BaseTool,
    InputSchema,
    SchemaProperty,
    Tool,
    ToolDefinition,
    ToolResult,
)
from demo_tools.exceptions import (
    InvalidOperationError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
    UnknownOperationError,
)
from demo_tools.registry import ToolRegistry
from demo_tools.validation import validate_arguments

__all__ = [
    "BaseTool",
    "InputSchema",
    "SchemaProperty",
    "Tool",
    "ToolDefinition",
    "ToolResult",
    "InvalidOperationError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolValidationError",
    "UnknownOperationError",
    "ToolRegistry",
    "validate_arguments",
]
