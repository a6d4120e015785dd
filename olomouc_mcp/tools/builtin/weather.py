"""Weather tool — simulated current weather for a city."""
import logging

from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

CONDITIONS = ("Sunny", "Cloudy", "Rainy", "Partly Cloudy", "Stormy")


@register_tool(
    "get-weather",
    description="Gets simulated weather information for a given city",
    params=[
        ToolParam("city", description="City name"),
        ToolParam("units", description="Temperature units", required=False,
                  enum=("celsius", "fahrenheit"), default="celsius"),
    ],
    annotations=ToolAnnotations(title="Weather Tool", idempotent=False, open_world=True),
)
async def get_weather(ctx, city: str, units: str = "celsius", **kwargs) -> ToolResult:
    rng = ctx.random
    condition = rng.choice(CONDITIONS)

    base_temp = rng.randint(15, 30)
    if units == "fahrenheit":
        temperature = base_temp * 9 / 5 + 32
        unit = "°F"
    else:
        temperature = float(base_temp)
        unit = "°C"

    humidity = rng.randint(40, 90)
    wind_speed = rng.randint(5, 25)

    text = (
        f"Weather for {city}:\n"
        f"Condition: {condition}\n"
        f"Temperature: {temperature:.1f}{unit}\n"
        f"Humidity: {humidity}%\n"
        f"Wind Speed: {wind_speed} km/h\n"
        f"\n(Note: This is simulated data for demonstration purposes)"
    )
    return ToolResult(type="text", text=text)
