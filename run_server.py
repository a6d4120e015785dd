#!/usr/bin/env python3
"""
Olomouc MCP server launcher
  stdio (default):  python run_server.py
  HTTP:             python run_server.py --mode http --host 0.0.0.0 --port 8080
"""
import argparse
import asyncio
import logging
import sys

import uvicorn

from olomouc_mcp.config import describe, load_settings
from olomouc_mcp.context import build_context
from olomouc_mcp.main import create_app
from olomouc_mcp.server import McpServer
from olomouc_mcp.stdio import serve_stdio
from olomouc_mcp.tools import build_registry

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Olomouc MCP tool server (stdio or HTTP).")
    p.add_argument("--mode", choices=["stdio", "http"], default="stdio",
                   help="Run as MCP over stdio (default) or expose an HTTP server.")
    p.add_argument("--host", default=None, help="HTTP host (default: MCP_HTTP_HOST or 127.0.0.1).")
    p.add_argument("--port", type=int, default=None, help="HTTP port (default: MCP_HTTP_PORT or 8080).")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings()

    # stdout belongs to the protocol in stdio mode
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info(f"Starting {settings.app_name} {settings.app_version} in mode={args.mode}")

    if args.mode == "stdio":
        logger.info(describe(settings))
        server = McpServer(build_registry(), build_context(settings), settings)
        try:
            asyncio.run(serve_stdio(server))
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
        return

    host = args.host or settings.http_host
    port = args.port or settings.http_port
    logger.info(f"HTTP server will run on http://{host}:{port} (MCP endpoint /mcp)")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
