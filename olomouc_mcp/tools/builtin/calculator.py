"""Calculator tools — one four-operation calculator plus single-purpose arithmetic tools."""
import logging

from ..errors import ExecutorError
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

_SYMBOLS = {
    "add": "+",
    "subtract": "-",
    "multiply": "×",
    "divide": "÷",
}


def format_number(value) -> str:
    """Render whole floats without a trailing .0 (5.0 → '5')."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return str(value)


@register_tool(
    "calculator",
    description="Performs basic arithmetic operations (add, subtract, multiply, divide) on two numbers",
    params=[
        ToolParam("operation", description="The arithmetic operation to perform",
                  enum=("add", "subtract", "multiply", "divide")),
        ToolParam("a", type="number", description="First number"),
        ToolParam("b", type="number", description="Second number"),
    ],
    annotations=ToolAnnotations(title="Calculator"),
)
async def calculator(ctx, operation: str, a: float, b: float, **kwargs) -> ToolResult:
    if operation == "add":
        result = a + b
    elif operation == "subtract":
        result = a - b
    elif operation == "multiply":
        result = a * b
    elif operation == "divide":
        if b == 0:
            raise ExecutorError("Division by zero is not allowed")
        result = a / b
    else:
        raise ExecutorError(f"Invalid operation: {operation}")

    return ToolResult(
        type="text",
        text=f"{format_number(a)} {_SYMBOLS[operation]} {format_number(b)} = {format_number(result)}",
    )


_INT_PAIR = [
    ToolParam("a", type="integer", description="First number"),
    ToolParam("b", type="integer", description="Second number"),
]


@register_tool(
    "add_numbers",
    description="Add two numbers together",
    params=_INT_PAIR,
    annotations=ToolAnnotations(title="Add Numbers"),
)
async def add_numbers(ctx, a: int, b: int, **kwargs) -> ToolResult:
    return ToolResult(type="text", text=str(a + b))


@register_tool(
    "subtract_numbers",
    description="Subtract second number from first",
    params=_INT_PAIR,
    annotations=ToolAnnotations(title="Subtract Numbers"),
)
async def subtract_numbers(ctx, a: int, b: int, **kwargs) -> ToolResult:
    return ToolResult(type="text", text=str(a - b))


@register_tool(
    "multiply_numbers",
    description="Multiply two numbers",
    params=_INT_PAIR,
    annotations=ToolAnnotations(title="Multiply Numbers"),
)
async def multiply_numbers(ctx, a: int, b: int, **kwargs) -> ToolResult:
    return ToolResult(type="text", text=str(a * b))


@register_tool(
    "calculate_power",
    description="Calculate base raised to the power of exponent",
    params=[
        ToolParam("base", type="number", description="Base number", minimum=0, maximum=1000),
        ToolParam("exponent", type="integer", description="Exponent", minimum=0, maximum=10),
    ],
    annotations=ToolAnnotations(title="Calculate Power"),
)
async def calculate_power(ctx, base: float, exponent: int, **kwargs) -> ToolResult:
    return ToolResult(type="text", text=format_number(base ** exponent))
