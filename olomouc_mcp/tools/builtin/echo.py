"""Echo tool."""
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult


@register_tool(
    "echo",
    description="Echoes back the provided message with an optional prefix",
    params=[
        ToolParam("message", description="The message to echo back"),
        ToolParam("prefix", description="Optional prefix to add before the message", required=False),
    ],
    annotations=ToolAnnotations(title="Echo Tool"),
)
async def echo(ctx, message: str, prefix=None, **kwargs) -> ToolResult:
    if prefix is not None:
        return ToolResult(type="text", text=f"{prefix}: {message}")
    return ToolResult(type="text", text=message)
