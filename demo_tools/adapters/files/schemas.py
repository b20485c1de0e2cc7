"""File operations adapter schemas.

Input schema for FileOperationsTool and one output model per operation.
"""

from typing import Literal

from pydantic import BaseModel, Field

from demo_tools.base import InputSchema, SchemaProperty

OPERATIONS = ("read", "write", "list", "info")


FILE_OPERATIONS_INPUT_SCHEMA = InputSchema(
    properties={
        "operation": SchemaProperty(
            type="string",
            enum=list(OPERATIONS),
            description="The file operation to perform",
        ),
        "path": SchemaProperty(
            type="string",
            description="File or directory path (relative to workspace)",
        ),
        "content": SchemaProperty(
            type="string",
            description="Content to write (required for write operation)",
        ),
    },
    required=["operation", "path"],
)


# ============================================================================
# READ
# ============================================================================


class ReadFileOutput(BaseModel):
    """Output schema for the read operation."""

    path: str
    content: str
    size: int = Field(..., description="Length of the decoded text")


# ============================================================================
# WRITE
# ============================================================================


class WriteFileOutput(BaseModel):
    """Output schema for the write operation."""

    path: str
    message: str = "File written successfully"


# ============================================================================
# LIST
# ============================================================================


class DirectoryEntry(BaseModel):
    """Single child of a listed directory."""

    name: str
    type: Literal["file", "directory"]
    size: int


class ListDirectoryOutput(BaseModel):
    """Output schema for the list operation."""

    path: str
    entries: list[DirectoryEntry]


# ============================================================================
# INFO
# ============================================================================


class FileInfoOutput(BaseModel):
    """Output schema for the info operation."""

    path: str
    type: Literal["file", "directory"]
    size: int
    created: str = Field(..., description="ISO-8601 UTC creation (or change) time")
    modified: str = Field(..., description="ISO-8601 UTC modification time")
