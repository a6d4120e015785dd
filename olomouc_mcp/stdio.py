"""stdio transport: MCP over stdin/stdout via the SDK's stdio_server.

stdout carries protocol frames only; logging must go to stderr.
"""
import logging

from mcp.server.stdio import stdio_server

from .server import McpServer

logger = logging.getLogger(__name__)


async def serve_stdio(server: McpServer, stdin=None, stdout=None):
    """Serve until stdin closes. stdin/stdout are anyio async files (default: the process streams)."""
    logger.info("stdio transport ready")
    try:
        async with stdio_server(stdin, stdout) as (read_stream, write_stream):
            await server.server.run(
                read_stream,
                write_stream,
                server.server.create_initialization_options(),
            )
    finally:
        logger.info("stdio transport stopped")
        await server.ctx.db.dispose()
