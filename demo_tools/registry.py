"""Tool Registry.

Name -> tool mapping built once at startup. Listing follows registration
order.
"""

from demo_obs.logging import get_logger
from demo_tools.base import Tool, ToolDefinition

logger = get_logger(__name__)


class ToolRegistry:
    """In-memory registry of tools."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool. A tool with the same name is replaced."""
        if tool.name in self._tools:
            logger.warning("tool_registration_replaced", tool=tool.name)
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    # Defined after names(): inside the class body `list` is this method.
    def list(self) -> list[ToolDefinition]:
        """Definitions of all registered tools, in registration order."""
        return [tool.definition() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
