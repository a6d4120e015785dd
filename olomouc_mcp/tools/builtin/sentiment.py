"""Sentiment tool: citizen sentiment records (good/bad/neutral) around a location."""
import logging

from ..geo import as_float, haversine_sql, latitude_param, longitude_param, or_na
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

SENTIMENT_TYPES = ("good", "bad", "neutral")

_SENTIMENT_SQL = f"""
    SELECT * FROM (
        SELECT
            "feature_id", "class", "lat", "long", "datetime", "starttime_converted", "comments",
            "name", "url",
            ({haversine_sql('"lat"', '"long"')}) AS distance_km
        FROM public."sentiment-data"
        WHERE LOWER("class") = :sentiment_type
    ) AS subquery
    WHERE distance_km <= :radius_km
    ORDER BY "datetime" DESC, distance_km ASC
"""


def _or(value, placeholder: str) -> str:
    return str(value) if value else placeholder


@register_tool(
    "get_location_sentiment",
    description=(
        "Retrieves sentiment data (good, bad, or neutral) for a specific geographic location from the "
        "sentiment database. Queries the sentiment-data table to find sentiment records matching the given "
        "coordinates and sentiment type. Returns relevant sentiment information including feature IDs, "
        "timestamps, and any associated comments."
    ),
    params=[
        latitude_param(),
        longitude_param(),
        ToolParam("sentiment_type",
                  description=("Type of sentiment to filter by. Options: 'good' for good sentiment, "
                               "'bad' for bad sentiment, 'neutral' for neutral sentiment."),
                  required=False, default="good", enum=SENTIMENT_TYPES, lowercase=True),
        ToolParam("radius_km", type="number",
                  description=("Optional search radius in kilometers from the specified coordinates. "
                               "Returns all sentiment records within this distance. Default is 1.0 km."),
                  required=False, default=1.0, minimum=0),
    ],
    annotations=ToolAnnotations(title="Location Sentiment Data Tool"),
)
async def location_sentiment(ctx, latitude: float, longitude: float, sentiment_type: str = "good",
                             radius_km: float = 1.0, **kwargs) -> ToolResult:
    rows = await ctx.db.query(_SENTIMENT_SQL, {
        "latitude": latitude,
        "longitude": longitude,
        "sentiment_type": sentiment_type,
        "radius_km": radius_km,
    })

    if not rows:
        return ToolResult(
            type="text",
            text=(f"No {sentiment_type} sentiment data found within {radius_km:.1f} km of coordinates "
                  f"({latitude:.4f}, {longitude:.4f})."),
        )

    lines = [
        f"Found {len(rows)} {sentiment_type} sentiment record(s) within {radius_km:.1f} km of "
        f"({latitude:.4f}, {longitude:.4f}):\n"
    ]
    for i, row in enumerate(rows, 1):
        lines.append(
            f"Record #{i} (Feature ID: {or_na(row.get('feature_id'))})\n"
            f"  Distance: {as_float(row.get('distance_km')):.2f} km\n"
            f"  Location: Lat {as_float(row.get('lat')):.4f}, Lon {as_float(row.get('long')):.4f}\n"
            f"  Name: {_or(row.get('name'), '(No name)')}\n"
            f"  URL: {_or(row.get('url'), '(No URL)')}\n"
            f"  Sentiment: {or_na(row.get('class'))}\n"
            f"  DateTime: {or_na(row.get('datetime'))}\n"
            f"  Start Time: {or_na(row.get('starttime_converted'))}\n"
            f"  Comments: {_or(row.get('comments'), '(No comments)')}\n"
        )
    return ToolResult(type="text", text="\n".join(lines))
