"""Workspace filesystem client.

Confines file access to a workspace root and maps missing-path errors to
FileOperationNotFoundError. Blocking filesystem calls run in a worker thread.
"""

import asyncio
import os
import stat as stat_mod
from datetime import datetime, timezone
from pathlib import Path, PureWindowsPath
from typing import Any

from .exceptions import FileOperationNotFoundError, PathNotAllowedError


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def _entry_type(is_dir: bool) -> str:
    return "directory" if is_dir else "file"


class WorkspaceClient:
    """Filesystem access rooted at a fixed workspace directory."""

    def __init__(self, root: str | os.PathLike | None = None):
        """Initialize workspace client.

        Args:
            root: Workspace root; defaults to the current working directory
        """
        self._root = Path(root).absolute() if root else Path.cwd()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> Path:
        """Map a client-supplied relative path into the workspace.

        Raises:
            PathNotAllowedError: Path contains '..' or is absolute
        """
        if ".." in path:
            raise PathNotAllowedError("Path traversal (..) is not allowed")
        if path.startswith(("/", "\\")) or Path(path).is_absolute() or PureWindowsPath(path).drive:
            raise PathNotAllowedError("Absolute paths are not allowed")
        return self._root / path

    async def read_text(self, path: str) -> str:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except FileNotFoundError:
            raise FileOperationNotFoundError(path)

    async def write_text(self, path: str, content: str) -> None:
        target = self.resolve(path)
        try:
            await asyncio.to_thread(target.write_text, content, encoding="utf-8")
        except FileNotFoundError:
            raise FileOperationNotFoundError(path)

    async def list_directory(self, path: str) -> list[dict[str, Any]]:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(self._scan, target)
        except FileNotFoundError:
            raise FileOperationNotFoundError(path)

    async def stat(self, path: str) -> dict[str, Any]:
        target = self.resolve(path)
        try:
            st = await asyncio.to_thread(target.stat)
        except FileNotFoundError:
            raise FileOperationNotFoundError(path)

        return {
            "type": _entry_type(stat_mod.S_ISDIR(st.st_mode)),
            "size": st.st_size,
            # st_birthtime is missing on most Linux builds
            "created": _isoformat(getattr(st, "st_birthtime", st.st_ctime)),
            "modified": _isoformat(st.st_mtime),
        }

    @staticmethod
    def _scan(directory: Path) -> list[dict[str, Any]]:
        entries = []
        with os.scandir(directory) as it:
            for entry in it:
                st = entry.stat()
                entries.append(
                    {
                        "name": entry.name,
                        "type": _entry_type(entry.is_dir()),
                        "size": st.st_size,
                    }
                )
        return sorted(entries, key=lambda e: e["name"])
