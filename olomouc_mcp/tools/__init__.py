"""Tool system: registry, validation, executor."""
from .errors import ToolError
from .registry import (
    ToolAnnotations,
    ToolDef,
    ToolParam,
    ToolRegistry,
    ToolResult,
    build_registry,
    register_tool,
)
from .executor import execute_tool
