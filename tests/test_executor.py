"""Tests for tools/executor.py — dispatch and error normalization."""
from unittest.mock import patch

import pytest

from olomouc_mcp.tools.errors import ExecutorError, QueryError
from olomouc_mcp.tools.executor import execute_tool
from olomouc_mcp.tools.registry import ToolDef, ToolParam, ToolResult, build_registry


async def _boom(ctx, **kwargs):
    raise RuntimeError("kaboom")


async def _business_error(ctx, **kwargs):
    raise ExecutorError("Nothing to do")


async def _query_error(ctx, **kwargs):
    raise QueryError("Database Error: connection refused")


async def _echo_args(ctx, **kwargs):
    return ToolResult(type="text", text=repr(sorted(kwargs.items())))


@pytest.fixture
def failing_registry():
    return build_registry([
        ToolDef("boom", "raises", (), _boom),
        ToolDef("business", "raises ExecutorError", (), _business_error),
        ToolDef("query", "raises QueryError", (), _query_error),
        ToolDef("args", "echo args", (ToolParam("n", type="integer"),), _echo_args),
    ])


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry, ctx):
        result = await execute_tool(registry, "unknown-tool", {}, ctx)
        assert result.type == "error"
        assert result.text == "Unknown tool: unknown-tool"

    @pytest.mark.asyncio
    async def test_missing_parameter_named(self, registry, ctx):
        result = await execute_tool(registry, "echo", {}, ctx)
        assert result.is_error
        assert "message" in result.text

    @pytest.mark.asyncio
    async def test_none_args(self, registry, ctx):
        result = await execute_tool(registry, "get-time", None, ctx)
        assert result.type == "text"

    @pytest.mark.asyncio
    async def test_coerced_args_reach_handler(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "args", {"n": "4.8", "extra": 1}, ctx)
        assert result.text == "[('n', 4)]"

    @pytest.mark.asyncio
    async def test_type_mismatch(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "args", {"n": "four"}, ctx)
        assert result.is_error
        assert "'n'" in result.text


class TestErrorNormalization:
    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "boom", {}, ctx)
        assert result.type == "error"
        assert "kaboom" in result.text

    @pytest.mark.asyncio
    async def test_tool_error_message_kept(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "business", {}, ctx)
        assert result.type == "error"
        assert result.text == "Nothing to do"

    @pytest.mark.asyncio
    async def test_collaborator_error(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "query", {}, ctx)
        assert result.is_error
        assert "connection refused" in result.text

    @pytest.mark.asyncio
    async def test_unexpected_validation_failure_becomes_error(self, registry, ctx):
        with patch("olomouc_mcp.tools.executor.validate_args", side_effect=RuntimeError("bad coercion")):
            result = await execute_tool(registry, "echo", {"message": "hi"}, ctx)
        assert result.is_error
        assert result.text == "Invalid arguments for echo: bad coercion"


class TestOversizedNumbers:
    @pytest.mark.asyncio
    async def test_calculator_operand(self, registry, ctx):
        result = await execute_tool(registry, "calculator", {"operation": "add", "a": 10**400, "b": 1}, ctx)
        assert result.is_error
        assert "'a'" in result.text

    @pytest.mark.asyncio
    async def test_coordinate_never_reaches_database(self, registry, ctx, fake_db):
        result = await execute_tool(registry, "find-nearby-meteostations",
                                    {"latitude": 10**400, "longitude": 17.25}, ctx)
        assert result.is_error
        assert "'latitude'" in result.text
        assert fake_db.calls == []

    @pytest.mark.asyncio
    async def test_integer_param_keeps_exact_value(self, failing_registry, ctx):
        result = await execute_tool(failing_registry, "args", {"n": 10**400}, ctx)
        assert result.type == "text"
