"""Tool Adapters.

Available adapters:
- calculator: basic arithmetic
- files: workspace file access
- system: host statistics
"""

from demo_tools.adapters.calculator import register_calculator_tools
from demo_tools.adapters.files import register_file_tools
from demo_tools.adapters.system import register_system_tools

__all__ = ["calculator", "files", "system", "register_default_tools"]


def register_default_tools(registry, workspace_root: str | None = None) -> None:
    """Register every built-in tool, in listing order."""
    register_calculator_tools(registry)
    register_file_tools(registry, workspace_root=workspace_root)
    register_system_tools(registry)
