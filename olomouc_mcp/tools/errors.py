"""Tool error types: raised by validation, collaborators and executors.

Every ToolError is turned into an error ToolResult by the executor, so the
message must be readable by an MCP client on its own.
"""
from typing import Any, Dict, Optional


def preview(value: Any, limit: int = 60) -> str:
    """Short repr for messages; huge ints cannot always be rendered in full."""
    try:
        text = repr(value)
    except ValueError:
        return f"<{type(value).__name__}>"
    return text if len(text) <= limit else text[:limit] + "..."


class ToolError(Exception):
    code = "tool_error"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        message = message.strip() if isinstance(message, str) else ""
        super().__init__(message or "Unknown tool error")
        self.message = message or "Unknown tool error"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class UnknownToolError(ToolError):
    code = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", details={"tool": name})
        self.name = name


class DuplicateToolError(ToolError):
    code = "duplicate_tool"

    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}", details={"tool": name})
        self.name = name


class MissingParameterError(ToolError):
    code = "missing_parameter"

    def __init__(self, param: str):
        super().__init__(f"Missing required parameter: {param}", details={"param": param})
        self.param = param


class TypeMismatchError(ToolError):
    code = "type_mismatch"

    def __init__(self, param: str, expected: str, value: Any):
        super().__init__(
            f"Parameter '{param}' must be of type {expected}, got {preview(value)}",
            details={"param": param, "expected": expected},
        )
        self.param = param


class InvalidEnumError(ToolError):
    code = "invalid_enum"

    def __init__(self, param: str, value: Any, allowed):
        choices = ", ".join(f"'{v}'" for v in allowed)
        super().__init__(
            f"Parameter '{param}' must be one of {choices}, got {preview(value)}",
            details={"param": param, "allowed": list(allowed)},
        )
        self.param = param


class OutOfRangeError(ToolError):
    code = "out_of_range"

    def __init__(self, param: str, value: Any, minimum=None, maximum=None):
        if minimum is not None and maximum is not None:
            bounds = f"between {minimum} and {maximum}"
        elif minimum is not None:
            bounds = f">= {minimum}"
        else:
            bounds = f"<= {maximum}"
        super().__init__(
            f"Parameter '{param}' must be {bounds}, got {preview(value)}",
            details={"param": param, "minimum": minimum, "maximum": maximum},
        )
        self.param = param


class QueryError(ToolError):
    code = "query_error"


class NetworkError(ToolError):
    code = "network_error"


class ExecutorError(ToolError):
    code = "executor_error"
