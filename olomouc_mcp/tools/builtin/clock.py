"""Current date/time in a timezone, rendered with date() style format letters."""
import logging

from ...dateformat import format_php_date
from ..errors import ExecutorError
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)


@register_tool(
    "get-time",
    description="Gets the current date and time in the specified timezone and format",
    params=[
        ToolParam("timezone", description='Timezone identifier (e.g., "UTC", "America/New_York", "Europe/London")',
                  required=False, default="UTC"),
        ToolParam("format", description='Date format (e.g., "Y-m-d H:i:s", "c", "r")',
                  required=False, default="Y-m-d H:i:s"),
    ],
    annotations=ToolAnnotations(title="Time Tool", idempotent=False),
)
async def get_time(ctx, timezone: str = "UTC", format: str = "Y-m-d H:i:s", **kwargs) -> ToolResult:
    try:
        now = ctx.clock.now(timezone)
    except ValueError as e:
        raise ExecutorError(str(e)) from e
    return ToolResult(type="text", text=f"Current time in {timezone}: {format_php_date(now, format)}")
