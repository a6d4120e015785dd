"""Tool registry: declarative tool catalog, frozen name→tool lookup."""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import DuplicateToolError, UnknownToolError

logger = logging.getLogger(__name__)

PARAM_TYPES = ("string", "number", "integer", "boolean")


@dataclass(frozen=True)
class ToolParam:
    name: str
    type: str = "string"
    description: str = ""
    required: bool = True
    default: Any = None
    enum: Optional[Tuple[Any, ...]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    lowercase: bool = False  # lower-case string values before the enum check

    def __post_init__(self):
        if self.type not in PARAM_TYPES:
            raise ValueError(f"Unsupported parameter type for {self.name}: {self.type}")

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        return schema


@dataclass(frozen=True)
class ToolAnnotations:
    title: str = ""
    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True
    open_world: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "readOnlyHint": self.read_only,
            "destructiveHint": self.destructive,
            "idempotentHint": self.idempotent,
            "openWorldHint": self.open_world,
        }


@dataclass
class ToolResult:
    type: str  # "text" | "error"
    text: str = ""

    @property
    def is_error(self) -> bool:
        return self.type == "error"


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    params: Tuple[ToolParam, ...]
    handler: Callable[..., Awaitable[ToolResult]]
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }

    def describe(self) -> Dict[str, Any]:
        """MCP tools/list entry."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
            "annotations": self.annotations.to_dict(),
        }


class ToolRegistry:
    """Name→ToolDef mapping. Filled once at startup, read-only after freeze()."""

    def __init__(self):
        self._tools: Dict[str, ToolDef] = {}
        self._frozen = False

    def register(self, tool: ToolDef) -> None:
        if self._frozen:
            raise RuntimeError(f"Registry is frozen, cannot register {tool.name}")
        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> ToolDef:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def get(self, name: str) -> Optional[ToolDef]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def all(self) -> Dict[str, ToolDef]:
        return dict(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


# Declared tools, in import order. Populated by @register_tool.
_catalog: List[ToolDef] = []


def register_tool(
    name: str,
    description: str = "",
    params: Optional[List[ToolParam]] = None,
    annotations: Optional[ToolAnnotations] = None,
):
    """Decorator to declare a tool in the builtin catalog."""
    def decorator(func):
        tool = ToolDef(
            name=name,
            description=description or func.__doc__ or "",
            params=tuple(params or []),
            handler=func,
            annotations=annotations or ToolAnnotations(title=name),
        )
        _catalog.append(tool)
        return func
    return decorator


def declared_tools() -> List[ToolDef]:
    return list(_catalog)


def build_registry(tools: Optional[Iterable[ToolDef]] = None) -> ToolRegistry:
    """Register every tool (default: the builtin catalog) and freeze."""
    if tools is None:
        from . import builtin  # noqa: F401  ensure catalog modules are imported
        tools = declared_tools()
    registry = ToolRegistry()
    for tool in tools:
        registry.register(tool)
    logger.info(f"Tool registry ready: {len(registry)} tools")
    return registry.freeze()
