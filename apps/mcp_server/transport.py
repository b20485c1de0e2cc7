"""Line-delimited JSON over stdin/stdout.

Each message is one line of JSON. stdout is reserved for protocol messages;
logs go to stderr (see demo_obs.logging).
"""

import asyncio
import json
import os
import sys
from typing import Any, BinaryIO, TextIO

from demo_obs.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_LINE_BYTES = 16 * 1024 * 1024
_DISCARD_CHUNK = 64 * 1024


class TransportError(RuntimeError):
    """Transport could not be attached or is unusable."""


class MessageParseError(ValueError):
    """Inbound line is not valid JSON or is too large."""


class StdioTransport:
    """Duplex channel over the process's standard streams.

    Pipes, sockets and terminals are attached to the event loop and read
    asynchronously. Anything else readable (stdin redirected from a regular
    file) is read line by line in a worker thread. Writing is a plain blocking
    write plus flush; a broken pipe propagates and ends the process.
    """

    def __init__(
        self,
        stdin: Any = None,
        stdout: TextIO | None = None,
        reader: asyncio.StreamReader | None = None,
        max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
    ):
        """Initialize transport.

        Args:
            stdin: File object read by connect() (default: sys.stdin)
            stdout: Text stream for outbound messages (default: sys.stdout)
            reader: Pre-built StreamReader; connect() then attaches nothing
            max_line_bytes: Longest accepted inbound line
        """
        self._stdin = stdin
        self._stdout = stdout
        self._reader = reader
        self.max_line_bytes = max_line_bytes
        self._pipe_transport: asyncio.BaseTransport | None = None
        self._file: BinaryIO | None = None
        self._aborted = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def connect(self) -> None:
        """Attach stdin.

        Raises:
            TransportError: stdin is closed or its descriptor is not readable
        """
        if self._reader is not None or self._file is not None:
            return

        stdin = self._stdin if self._stdin is not None else sys.stdin
        try:
            os.fstat(stdin.fileno())
        except (OSError, ValueError) as e:
            raise TransportError(f"Cannot read from stdin: {e}") from e

        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self.max_line_bytes)
        try:
            self._pipe_transport, _ = await loop.connect_read_pipe(
                lambda: asyncio.StreamReaderProtocol(reader), stdin
            )
        except (OSError, ValueError, NotImplementedError) as e:
            # Regular files (and /dev/null) cannot be polled by the loop
            self._file = getattr(stdin, "buffer", stdin)
            logger.debug("stdio_transport_connected", mode="thread", reason=str(e))
            return

        self._reader = reader
        logger.debug("stdio_transport_connected", mode="pipe")

    async def receive(self) -> Any | None:
        """Read the next decoded message.

        Returns:
            Decoded JSON value, or None at end of input

        Raises:
            MessageParseError: Line is not valid JSON or exceeds max_line_bytes
        """
        if self._reader is None and self._file is None:
            raise TransportError("Transport is not connected")

        while True:
            if self._aborted:
                return None

            if self._file is not None:
                line = await asyncio.to_thread(self._read_file_line)
            else:
                try:
                    line = await self._reader.readline()
                except ValueError as e:
                    raise MessageParseError(
                        f"Message exceeds {self.max_line_bytes} bytes"
                    ) from e

            if not line:
                return None

            line = line.strip()
            if not line:
                continue

            try:
                return json.loads(line)
            except ValueError as e:
                raise MessageParseError(str(e)) from e

    def _read_file_line(self) -> bytes:
        line = self._file.readline(self.max_line_bytes + 1)
        if len(line) <= self.max_line_bytes or line.endswith(b"\n"):
            return line

        # Drop the rest of the oversize line so the next read starts clean
        while True:
            chunk = self._file.readline(_DISCARD_CHUNK)
            if not chunk or chunk.endswith(b"\n"):
                break
        raise MessageParseError(f"Message exceeds {self.max_line_bytes} bytes")

    async def send(self, message: dict[str, Any]) -> None:
        """Write one message as a single line."""
        stdout = self._stdout if self._stdout is not None else sys.stdout
        stdout.write(json.dumps(message, ensure_ascii=False) + "\n")
        stdout.flush()

    def abort(self) -> None:
        """Make a pending or later receive() return end of input."""
        self._aborted = True
        if self._pipe_transport is not None:
            # Stop the loop feeding data into a reader that is about to see EOF
            self._pipe_transport.close()
            self._pipe_transport = None
        if self._reader is not None:
            self._reader.feed_eof()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._pipe_transport is not None:
            self._pipe_transport.close()
            self._pipe_transport = None
        logger.debug("stdio_transport_closed")
