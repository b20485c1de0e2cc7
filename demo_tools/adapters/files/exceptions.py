"""File operations adapter exceptions.

Only the failures the adapter recognises get their own type. Any other
OSError raised by the filesystem propagates as-is so its message reaches the
client unmodified.
"""

from demo_tools.exceptions import ToolExecutionError


class FileOperationError(ToolExecutionError):
    """Base exception for the file operations adapter."""

    pass


class PathNotAllowedError(FileOperationError):
    """Path is absolute or contains a parent-directory segment."""

    pass


class FileOperationNotFoundError(FileOperationError):
    """Target file or directory does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File or directory not found: {path}")
        self.path = path
