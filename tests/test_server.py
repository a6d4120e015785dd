"""Tests for server.py — the registry served through the MCP SDK."""
from unittest.mock import AsyncMock, patch

import mcp.types as types
import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from olomouc_mcp.server import McpServer, result_envelope, to_mcp_tool
from olomouc_mcp.tools import ToolResult


@pytest.fixture
def server(registry, ctx, settings):
    return McpServer(registry, ctx, settings)


def _text(result: types.CallToolResult) -> str:
    return result.content[0].text


class TestToolMapping:
    def test_annotations_carried(self, registry):
        tool = to_mcp_tool(registry.resolve("get-weather"))
        assert tool.name == "get-weather"
        assert tool.inputSchema["required"] == ["city"]
        assert tool.annotations.title == "Weather Tool"
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.openWorldHint is True
        assert tool.annotations.idempotentHint is False

    def test_server_info(self, server):
        assert server.server_info == {"name": "olomouc-mcp-server", "version": "1.0.0"}
        assert server.server.name == "olomouc-mcp-server"


class TestSession:
    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            listing = await client.list_tools()
        names = [t.name for t in listing.tools]
        assert len(names) == 16
        assert "calculator" in names
        assert "get_location_sentiment" in names

    @pytest.mark.asyncio
    async def test_call(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("add_numbers", {"a": 2, "b": 3})
        assert result.isError is False
        assert _text(result) == "5"

    @pytest.mark.asyncio
    async def test_numeric_strings_reach_coercion(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("calculator", {"operation": "add", "a": "2", "b": "3"})
        assert result.isError is False
        assert _text(result) == "2 + 3 = 5"

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_result(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("nope", {})
        assert result.isError is True
        assert _text(result) == "Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_validation_error_is_error_result(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("find-nearby-meteostations", {"latitude": 95, "longitude": 17.25})
        assert result.isError is True
        assert "latitude" in _text(result)

    @pytest.mark.asyncio
    async def test_huge_integer_is_error_result(self, server, fake_db):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("find-nearby-meteostations", {"latitude": 10**400, "longitude": 17.25})
        assert result.isError is True
        assert fake_db.calls == []

    @pytest.mark.asyncio
    async def test_call_without_arguments(self, server):
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("get-time")
        assert _text(result).startswith("Current time in UTC:")

    @pytest.mark.asyncio
    async def test_handler_crash_is_error_result(self, server):
        with patch.object(server, "call_tool", AsyncMock(side_effect=RuntimeError("boom"))):
            async with create_connected_server_and_client_session(server.server) as client:
                result = await client.call_tool("echo", {"message": "hi"})
        assert result.isError is True


def test_result_envelope():
    assert result_envelope(ToolResult(type="text", text="ok")) == {"content": [{"type": "text", "text": "ok"}]}
    assert result_envelope(ToolResult(type="error", text="bad")) == {
        "isError": True,
        "content": [{"type": "text", "text": "bad"}],
    }
