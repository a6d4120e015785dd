"""MCP server core: the tool registry exposed through the MCP SDK's low-level Server.

Both transports (stdio and streamable HTTP) run this same Server instance.
"""
import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server

from .config import Settings
from .context import ToolContext
from .tools import ToolDef, ToolError, ToolRegistry, ToolResult, execute_tool

logger = logging.getLogger(__name__)


def to_mcp_tool(tool: ToolDef) -> types.Tool:
    a = tool.annotations
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.input_schema(),
        annotations=types.ToolAnnotations(
            title=a.title,
            readOnlyHint=a.read_only,
            destructiveHint=a.destructive,
            idempotentHint=a.idempotent,
            openWorldHint=a.open_world,
        ),
    )


def result_envelope(result: ToolResult) -> Dict[str, Any]:
    """{content: [{type: text, text}]} plus isError: true for failures."""
    content = [types.TextContent(type="text", text=result.text).model_dump(exclude_none=True)]
    if result.is_error:
        return {"isError": True, "content": content}
    return {"content": content}


class ToolCallFailed(ToolError):
    code = "tool_call_failed"


class McpServer:
    """Registry + collaborators bound to an MCP Server."""

    def __init__(self, registry: ToolRegistry, ctx: ToolContext, settings: Settings):
        self.registry = registry
        self.ctx = ctx
        self.settings = settings
        self.server = self._build_server()

    @property
    def server_info(self) -> Dict[str, str]:
        return {"name": self.settings.app_name, "version": self.settings.app_version}

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        return await execute_tool(self.registry, name, arguments or {}, self.ctx)

    def list_tools(self) -> List[types.Tool]:
        return [to_mcp_tool(tool) for tool in self.registry.all().values()]

    def _build_server(self) -> Server:
        server = Server(self.settings.app_name, version=self.settings.app_version)

        @server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return self.list_tools()

        # Arguments are coerced by validate_args, so the SDK's strict schema check stays off
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
            result = await self.call_tool(name, arguments)
            if result.is_error:
                # the SDK reports a raised exception as an isError result with its text
                raise ToolCallFailed(result.text)
            return [types.TextContent(type="text", text=result.text)]

        logger.info(f"MCP server ready: {self.settings.app_name} {self.settings.app_version}, "
                    f"{len(self.registry)} tools")
        return server
