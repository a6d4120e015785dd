"""Resolve a tool call, validate its arguments and normalize the outcome into a ToolResult."""
import logging
import time
import uuid
from typing import Any, Mapping, Optional

from .errors import ToolError, preview
from .registry import ToolRegistry, ToolResult
from .validation import validate_args

logger = logging.getLogger(__name__)


async def execute_tool(registry: ToolRegistry, tool_name: str, args: Optional[Mapping[str, Any]], ctx) -> ToolResult:
    """Execute a registered tool by name.

    Never raises: unknown tools, invalid arguments and executor failures all
    come back as an error ToolResult.
    """
    call_id = uuid.uuid4().hex[:8]
    t0 = time.monotonic()

    try:
        tool = registry.resolve(tool_name)
        validated = validate_args(tool.params, args or {})
    except ToolError as e:
        logger.warning(f"[{call_id}] Rejected call {tool_name}: {e.message}")
        return ToolResult(type="error", text=e.message)
    except Exception as e:
        logger.error(f"[{call_id}] Could not validate call {tool_name}: {e}", exc_info=True)
        return ToolResult(type="error", text=f"Invalid arguments for {tool_name}: {e}")

    arg_str = ", ".join(f"{k}={preview(v)}" for k, v in validated.items())
    logger.info(f"[{call_id}] Executing tool: {tool_name}({arg_str})")

    try:
        result = await tool.handler(ctx, **validated)
    except ToolError as e:
        logger.warning(f"[{call_id}] Tool {tool_name} failed ({e.code}): {e.message}")
        result = ToolResult(type="error", text=e.message)
    except Exception as e:
        logger.error(f"[{call_id}] Tool {tool_name} failed: {e}", exc_info=True)
        result = ToolResult(type="error", text=f"Unexpected error: {e}")

    elapsed = time.monotonic() - t0
    logger.info(f"[{call_id}] Tool {tool_name}: {elapsed:.3f}s -> {result.type}")
    return result
