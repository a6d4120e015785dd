"""Tests for the stdio transport."""
import json

import anyio
import pytest

from olomouc_mcp.server import McpServer
from olomouc_mcp.stdio import serve_stdio


@pytest.fixture
def server(registry, ctx, settings):
    return McpServer(registry, ctx, settings)


class ScriptedStdin:
    """Yields the given lines, then stays open until `release` is set."""

    def __init__(self, lines):
        self.lines = lines
        self.release = anyio.Event()

    async def __aiter__(self):
        for line in self.lines:
            yield line + "\n"
        await self.release.wait()


class CapturingStdout:
    """Collects frames; releases stdin once a reply with `last_id` is written."""

    def __init__(self, stdin: ScriptedStdin, last_id):
        self.stdin = stdin
        self.last_id = last_id
        self.frames = []

    async def write(self, data):
        for line in data.splitlines():
            if line.strip():
                frame = json.loads(line)
                self.frames.append(frame)
                if frame.get("id") == self.last_id:
                    self.stdin.release.set()

    async def flush(self):
        pass


def _initialize(request_id=1):
    return json.dumps({
        "jsonrpc": "2.0", "id": request_id, "method": "initialize",
        "params": {"protocolVersion": "2025-03-26", "capabilities": {},
                   "clientInfo": {"name": "test-client", "version": "0.1"}},
    })


def _initialized():
    return json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"})


def _call(request_id, name, arguments):
    return json.dumps({"jsonrpc": "2.0", "id": request_id, "method": "tools/call",
                       "params": {"name": name, "arguments": arguments}})


async def _serve(server, lines, last_id):
    stdin = ScriptedStdin(lines)
    stdout = CapturingStdout(stdin, last_id)
    with anyio.fail_after(10):
        await serve_stdio(server, stdin=stdin, stdout=stdout)
    return {f["id"]: f for f in stdout.frames if isinstance(f.get("id"), int)}


@pytest.mark.asyncio
async def test_serve_until_eof(server, fake_db):
    replies = await _serve(server, [_initialize(), _initialized(), _call(2, "add_numbers", {"a": 1, "b": 1})], 2)
    assert replies[1]["result"]["serverInfo"]["name"] == "olomouc-mcp-server"
    assert replies[2]["result"]["content"][0]["text"] == "2"
    assert fake_db.disposed


@pytest.mark.asyncio
async def test_bad_frames_do_not_stop_the_loop(server):
    lines = [
        _initialize(),
        _initialized(),
        json.dumps({"jsonrpc": "2.0", "id": {"x": 1}, "method": "ping"}),
        json.dumps({"jsonrpc": "2.0", "id": 1.5, "method": "ping"}),
        "{oops",
        _call(2, "echo", {"message": "still here"}),
    ]
    replies = await _serve(server, lines, 2)
    assert replies[2]["result"]["content"][0]["text"] == "still here"


@pytest.mark.asyncio
async def test_non_ascii_kept(server):
    replies = await _serve(server, [_initialize(), _initialized(), _call(2, "echo", {"message": "Horní náměstí"})], 2)
    assert replies[2]["result"]["content"][0]["text"] == "Horní náměstí"


@pytest.mark.asyncio
async def test_tool_error_reported_in_result(server):
    replies = await _serve(server, [_initialize(), _initialized(),
                                    _call(2, "calculator", {"operation": "divide", "a": 1, "b": 0})], 2)
    assert replies[2]["result"]["isError"] is True
    assert "Division by zero" in replies[2]["result"]["content"][0]["text"]
