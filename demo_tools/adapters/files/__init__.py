"""File operations adapter.

Provides a single tool for the workspace directory:
- Read text files
- Write files
- List directories
- Inspect file metadata

Usage:
    from demo_tools.adapters.files import register_file_tools
    from demo_tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_file_tools(registry, workspace_root="/srv/workspace")
"""

from .client import WorkspaceClient
from .exceptions import (
    FileOperationError,
    FileOperationNotFoundError,
    PathNotAllowedError,
)
from .schemas import (
    FILE_OPERATIONS_INPUT_SCHEMA,
    DirectoryEntry,
    FileInfoOutput,
    ListDirectoryOutput,
    ReadFileOutput,
    WriteFileOutput,
)
from .tool import FileOperationsTool

__all__ = [
    # Client
    "WorkspaceClient",
    # Exceptions
    "FileOperationError",
    "FileOperationNotFoundError",
    "PathNotAllowedError",
    # Schemas
    "FILE_OPERATIONS_INPUT_SCHEMA",
    "DirectoryEntry",
    "FileInfoOutput",
    "ListDirectoryOutput",
    "ReadFileOutput",
    "WriteFileOutput",
    # Tools
    "FileOperationsTool",
]


def register_file_tools(registry, workspace_root: str | None = None) -> None:
    """Register file tools with the tool registry.

    Args:
        registry: ToolRegistry instance
        workspace_root: Workspace directory (default: current working directory)
    """
    registry.register(FileOperationsTool(workspace_root=workspace_root))
