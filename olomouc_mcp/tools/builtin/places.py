"""Places tool: points of interest near a coordinate via the Mapy.cz geocoding API."""
import json
import logging

from ..errors import ExecutorError, NetworkError
from ..geo import latitude_param, longitude_param
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

SEARCH_QUERY = "park, kostel"
PREFER_NEAR_PRECISION_M = 300
RESULT_TYPES = (
    "regional",
    "regional.country",
    "regional.region",
    "regional.municipality",
    "regional.municipality_part",
    "regional.street",
    "regional.address",
    "poi",
)


def build_query(latitude: float, longitude: float, limit: int) -> list:
    """Query params as pairs; `type` and `preferNear` repeat (preferNear is lon, then lat)."""
    params = [("query", SEARCH_QUERY), ("lang", "cs"), ("limit", limit)]
    params += [("type", t) for t in RESULT_TYPES]
    params += [
        ("preferNear", longitude),
        ("preferNear", latitude),
        ("preferNearPrecision", PREFER_NEAR_PRECISION_M),
    ]
    return params


def _address(item: dict) -> str:
    location = item.get("location")
    if location:
        return location
    regional = item.get("regional") or {}
    if not isinstance(regional, dict):
        return "N/A"
    parts = [regional.get(k) for k in ("address", "city", "zip") if regional.get(k)]
    return ", ".join(str(p) for p in parts) if parts else "N/A"


def _coord(value) -> str:
    try:
        return f"{float(value):.6f}"
    except (TypeError, ValueError):
        return "N/A"


def format_place(index: int, item: dict) -> str:
    position = item.get("position") or {}
    text = (
        f"{index}. {item.get('name') or 'N/A'}\n"
        f"   Type: {item.get('type') or 'N/A'}\n"
        f"   Location: Lat {_coord(position.get('lat'))}, Lon {_coord(position.get('lon'))}\n"
        f"   Address: {_address(item)}\n"
    )
    if item.get("label"):
        text += f"   Label: {item['label']}\n"
    return text


@register_tool(
    "get-places-of-interest",
    description=(
        "Retrieves places of interest near specified geographic coordinates using the Mapy.cz geocoding "
        "API. Returns information about nearby locations including names, types, addresses, and "
        "coordinates. Search radius can be customized (default 300 meters)."
    ),
    params=[
        latitude_param(),
        longitude_param(),
        ToolParam("limit", type="integer", description="Maximum number of places to return. Default is 10.",
                  required=False, default=10),
    ],
    annotations=ToolAnnotations(title="Mapy.cz Places of Interest Tool", open_world=True),
)
async def places_of_interest(ctx, latitude: float, longitude: float, limit: int = 10, **kwargs) -> ToolResult:
    mapy = ctx.settings.mapy
    if not mapy.api_key:
        raise ExecutorError("Missing required environment variable MAPY_API_KEY")

    limit = max(limit, 1)
    status, body = await ctx.http.get(
        f"{mapy.base_url}/geocode",
        params=build_query(latitude, longitude, limit),
        headers={"Accept": "application/json", "X-Mapy-Api-Key": mapy.api_key},
        timeout=mapy.timeout_s,
    )

    try:
        data = json.loads(body)
    except ValueError:
        if status >= 400:
            raise NetworkError(f"Mapy.cz API returned HTTP {status}") from None
        raise ExecutorError("Invalid JSON response from API") from None

    if isinstance(data, dict) and data.get("error"):
        raise ExecutorError(f"API Error: {data['error']}")
    if status >= 400:
        logger.warning(f"Mapy.cz geocode HTTP {status}: {body[:200]}")
        raise NetworkError(f"Mapy.cz API returned HTTP {status}")
    if not isinstance(data, dict):
        raise ExecutorError("Invalid JSON response from API")

    items = data.get("items") or []
    if not items:
        return ToolResult(
            type="text",
            text=(f"No places of interest found near coordinates ({latitude:.4f}, {longitude:.4f}) "
                  f"within {PREFER_NEAR_PRECISION_M}m radius."),
        )

    blocks = [
        f"Found {len(items)} place(s) of interest near ({latitude:.4f}, {longitude:.4f}) "
        f"within {PREFER_NEAR_PRECISION_M}m radius:\n"
    ]
    blocks.extend(format_place(i, item) for i, item in enumerate(items, 1))
    return ToolResult(type="text", text="\n".join(blocks))
