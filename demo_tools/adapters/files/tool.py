"""File Operations Tool.

Read, write, list and stat files inside the workspace.
"""

from typing import Any

from demo_obs.logging import get_logger
from demo_tools.base import BaseTool, ToolResult
from demo_tools.exceptions import ToolValidationError, UnknownOperationError

from .client import WorkspaceClient
from .schemas import (
    FILE_OPERATIONS_INPUT_SCHEMA,
    DirectoryEntry,
    FileInfoOutput,
    ListDirectoryOutput,
    ReadFileOutput,
    WriteFileOutput,
)

logger = get_logger(__name__)


class FileOperationsTool(BaseTool):
    """Tool for workspace file access.

    Capabilities:
    - Read a UTF-8 text file
    - Create or overwrite a file
    - List a directory with entry types and sizes
    - Report type, size and timestamps of a path

    Paths are always relative to the workspace root. Absolute paths and
    anything containing '..' are rejected before the filesystem is touched.
    """

    name = "file_operations"
    description = "Read, write, and list files in the current workspace"
    input_schema = FILE_OPERATIONS_INPUT_SCHEMA

    def __init__(self, workspace_root: str | None = None, client: WorkspaceClient | None = None):
        """Initialize FileOperationsTool.

        Args:
            workspace_root: Directory all paths resolve against (default: cwd)
            client: Optional WorkspaceClient instance (creates new if None)
        """
        self.client = client or WorkspaceClient(workspace_root)

    @property
    def workspace_root(self):
        return self.client.root

    async def execute(self, ctx: dict, arguments: dict[str, Any]) -> ToolResult:
        """Execute file operation.

        Args:
            ctx: Execution context (request_id)
            arguments: Validated arguments matching FILE_OPERATIONS_INPUT_SCHEMA

        Returns:
            ToolResult with the operation's output model as payload

        Raises:
            PathNotAllowedError: Traversal or absolute path
            FileOperationNotFoundError: Target does not exist
            ToolValidationError: write without content
            UnknownOperationError: Unsupported operation
            OSError: Any other filesystem failure, unmodified
        """
        op = arguments["operation"]
        path = arguments["path"]

        # Path check happens before dispatching on the operation
        self.client.resolve(path)

        logger.debug("file_operation", operation=op, path=path, request_id=ctx.get("request_id"))

        if op == "read":
            content = await self.client.read_text(path)
            output = ReadFileOutput(path=path, content=content, size=len(content))
        elif op == "write":
            content = arguments.get("content")
            if not content:
                raise ToolValidationError("Content is required for write operation")
            await self.client.write_text(path, content)
            output = WriteFileOutput(path=path)
        elif op == "list":
            entries = await self.client.list_directory(path)
            output = ListDirectoryOutput(
                path=path,
                entries=[DirectoryEntry(**entry) for entry in entries],
            )
        elif op == "info":
            info = await self.client.stat(path)
            output = FileInfoOutput(path=path, **info)
        else:
            raise UnknownOperationError(op)

        return ToolResult(success=True, data=output.model_dump())
