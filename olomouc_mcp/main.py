"""HTTP transport: FastAPI app exposing MCP (streamable HTTP) at /mcp plus a plain invoke API."""
import json
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, describe, load_settings
from .context import build_context
from .server import McpServer, result_envelope
from .tools import build_registry

logger = logging.getLogger(__name__)


class InvokeRequest(BaseModel):
    tool: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class McpEndpoint:
    """ASGI endpoint handing /mcp requests to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send):
        await self.session_manager.handle_request(scope, receive, send)


def _error_body(message: str, code: int) -> dict:
    return {
        "error": message,
        "code": code,
        "status": "error",
        "context": {},
        "exceptionId": f"exception-{uuid.uuid4().hex}",
    }


def create_app(settings: Optional[Settings] = None, server: Optional[McpServer] = None) -> FastAPI:
    settings = settings or load_settings()
    if server is None:
        server = McpServer(build_registry(), build_context(settings), settings)
    logger.info(describe(settings))

    # Stateless: every POST is self-contained, replies are plain JSON
    session_manager = StreamableHTTPSessionManager(app=server.server, json_response=True, stateless=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with session_manager.run():
            yield
        await server.ctx.db.dispose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.mcp = server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f'No route found for "{request.method} {request.url}"'
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}")
        return JSONResponse(status_code=exc.status_code, content=_error_body(str(message), exc.status_code))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        body = _error_body("Invalid request body", 400)
        body["context"] = {"errors": json.loads(json.dumps(exc.errors(), default=str))}
        return JSONResponse(status_code=400, content=body)

    @app.get("/")
    async def index(request: Request):
        return {
            "appName": settings.app_name,
            "appVersion": settings.app_version,
            "apiDocs": f"{str(request.base_url).rstrip('/')}/docs",
        }

    @app.get("/health-check")
    async def health():
        return {"status": "ok"}

    @app.get("/tools")
    async def list_tools():
        return {"tools": server.registry.list_tools()}

    @app.post("/invoke")
    async def invoke(req: InvokeRequest):
        # Tool failures are part of the payload, never an HTTP error
        result = await server.call_tool(req.tool, req.arguments)
        return result_envelope(result)

    app.add_route("/mcp", McpEndpoint(session_manager), methods=["GET", "POST", "DELETE"], include_in_schema=False)

    return app
