"""Stdio transport tests."""

import io
import json
import os
import sys
from unittest.mock import MagicMock

import pytest

from apps.mcp_server.transport import (
    MessageParseError,
    StdioTransport,
    TransportError,
)


@pytest.mark.asyncio
async def test_receive_decodes_one_message_per_line(stdio):
    transport, _ = stdio({"jsonrpc": "2.0", "id": 1, "method": "tools/list"}, "[1, 2]")

    assert await transport.receive() == {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
    assert await transport.receive() == [1, 2]
    assert await transport.receive() is None


@pytest.mark.asyncio
async def test_blank_lines_are_skipped(stdio):
    transport, _ = stdio("", "   ", '{"a": 1}')
    assert await transport.receive() == {"a": 1}


@pytest.mark.asyncio
async def test_invalid_json_raises_parse_error(stdio):
    transport, _ = stdio("{not json", '{"ok": true}')

    with pytest.raises(MessageParseError):
        await transport.receive()
    assert await transport.receive() == {"ok": True}


@pytest.mark.asyncio
async def test_oversize_line_raises_parse_error(stdio):
    transport, _ = stdio("x" * 5000, '{"ok": true}', max_line_bytes=1024)

    with pytest.raises(MessageParseError, match="exceeds 1024 bytes"):
        await transport.receive()


@pytest.mark.asyncio
async def test_send_writes_single_line():
    out = io.StringIO()
    transport = StdioTransport(reader=MagicMock(), stdout=out)

    await transport.send({"jsonrpc": "2.0", "id": 1, "result": {"text": "a\nb", "name": "café"}})

    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["result"] == {"text": "a\nb", "name": "café"}


@pytest.mark.asyncio
async def test_abort_ends_pending_receive(stdio):
    transport, _ = stdio()
    transport.abort()
    assert await transport.receive() is None


@pytest.mark.asyncio
async def test_receive_requires_connect():
    with pytest.raises(TransportError):
        await StdioTransport(stdout=io.StringIO()).receive()


@pytest.mark.asyncio
async def test_regular_file_stdin_serves_every_line(tmp_path):
    """stdin redirected from a file is read in a worker thread."""
    path = tmp_path / "requests.jsonl"
    path.write_text(
        '{"jsonrpc": "2.0", "id": 1, "method": "initialize"}\n'
        "\n"
        '{"jsonrpc": "2.0", "method": "initialized"}',
        encoding="utf-8",
    )

    with open(path, "rb") as regular_file:
        transport = StdioTransport(stdin=regular_file, stdout=io.StringIO())
        await transport.connect()

        assert await transport.receive() == {"jsonrpc": "2.0", "id": 1, "method": "initialize"}
        assert await transport.receive() == {"jsonrpc": "2.0", "method": "initialized"}
        assert await transport.receive() is None
        await transport.close()

        assert regular_file.closed is False


@pytest.mark.asyncio
async def test_regular_file_oversize_line_is_skipped(tmp_path):
    path = tmp_path / "requests.jsonl"
    path.write_bytes(b"x" * 5000 + b"\n" + b'{"ok": true}\n')

    with open(path, "rb") as regular_file:
        transport = StdioTransport(stdin=regular_file, max_line_bytes=1024)
        await transport.connect()

        with pytest.raises(MessageParseError, match="exceeds 1024 bytes"):
            await transport.receive()
        assert await transport.receive() == {"ok": True}


@pytest.mark.asyncio
async def test_closed_stdin_raises_transport_error(tmp_path):
    path = tmp_path / "requests.jsonl"
    path.write_text("{}\n", encoding="utf-8")
    closed_file = open(path, "rb")
    closed_file.close()

    transport = StdioTransport(stdin=closed_file)
    with pytest.raises(TransportError, match="Cannot read from stdin"):
        await transport.connect()


@pytest.mark.asyncio
@pytest.mark.skipif(sys.platform == "win32", reason="unix pipe transport semantics")
async def test_connect_attaches_pipe():
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, "rb") as read_end, os.fdopen(write_fd, "wb") as write_end:
        transport = StdioTransport(stdin=read_end, stdout=io.StringIO())
        await transport.connect()

        write_end.write(b'{"jsonrpc": "2.0", "method": "initialized"}\n')
        write_end.flush()

        assert await transport.receive() == {"jsonrpc": "2.0", "method": "initialized"}
        await transport.close()


@pytest.mark.asyncio
async def test_abort_detaches_pipe_before_eof(stdio):
    transport, _ = stdio('{"late": true}')
    pipe = MagicMock()
    transport._pipe_transport = pipe

    transport.abort()

    pipe.close.assert_called_once()
    assert await transport.receive() is None

    await transport.close()
    pipe.close.assert_called_once()


@pytest.mark.asyncio
async def test_abort_stops_file_reads(tmp_path):
    path = tmp_path / "requests.jsonl"
    path.write_text('{"a": 1}\n{"b": 2}\n', encoding="utf-8")

    with open(path, "rb") as regular_file:
        transport = StdioTransport(stdin=regular_file)
        await transport.connect()

        assert await transport.receive() == {"a": 1}
        transport.abort()
        assert await transport.receive() is None


@pytest.mark.asyncio
async def test_close_is_idempotent():
    pipe = MagicMock()
    transport = StdioTransport(reader=MagicMock(), stdout=io.StringIO())
    transport._pipe_transport = pipe

    await transport.close()
    await transport.close()

    assert transport.closed is True
    pipe.close.assert_called_once()
