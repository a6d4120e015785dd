"""Traffic tool: latest intensity readings from the nearest Olomouc counting station."""
import logging

from ..geo import as_float, latitude_param, longitude_param, or_na
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

# Planar distance is enough to pick the nearest point within one city.
# lat/lon are stored as character varying.
_TRAFFIC_SQL = """
    WITH nearest_point AS (
        SELECT DISTINCT lat, lon, name,
               SQRT(POWER(CAST(lat AS DOUBLE PRECISION) - :latitude, 2)
                    + POWER(CAST(lon AS DOUBLE PRECISION) - :longitude, 2)) AS distance
        FROM "dopravni-processed"
        ORDER BY distance
        LIMIT 1
    )
    SELECT d.time, d.intensity, d.lat, d.lon, d.name
    FROM "dopravni-processed" d
    INNER JOIN nearest_point n ON d.lat = n.lat AND d.lon = n.lon
    ORDER BY d.time DESC
    LIMIT :limit
"""


@register_tool(
    "recent-traffic",
    description=(
        "Retrieves the most recent traffic intensity measurements from the closest traffic monitoring "
        "station to a specified geographic location in Olomouc. Searches for the nearest measuring point "
        "to the provided coordinates and returns the 5 most recent traffic intensity records from that "
        "station, ordered by timestamp (most recent first). Each result includes the measurement timestamp, "
        "traffic intensity value, and the actual coordinates of the measuring station."
    ),
    params=[
        latitude_param(),
        longitude_param(),
        ToolParam("limit", type="integer",
                  description="Maximum number of traffic intensity records to return. Default is 5.",
                  required=False, default=5),
    ],
    annotations=ToolAnnotations(title="Recent Traffic Intensity Tool"),
)
async def recent_traffic(ctx, latitude: float, longitude: float, limit: int = 5, **kwargs) -> ToolResult:
    limit = max(limit, 1)
    rows = await ctx.db.query(_TRAFFIC_SQL, {
        "latitude": latitude,
        "longitude": longitude,
        "limit": limit,
    })

    if not rows:
        return ToolResult(
            type="text",
            text=f"No traffic measurement data found near coordinates ({latitude:.6f}, {longitude:.6f}).",
        )

    station = rows[0]
    lines = [
        f"Nearest traffic measurement station: {station.get('name') or 'Unknown'}\n"
        f"Station location: Lat {as_float(station.get('lat')):.6f}, Lon {as_float(station.get('lon')):.6f}\n"
        f"Searched near: Lat {latitude:.6f}, Lon {longitude:.6f}\n\n"
        f"{len(rows)} most recent traffic intensity measurements:\n"
    ]
    for i, row in enumerate(rows, 1):
        lines.append(
            f"{i}. Time: {or_na(row.get('time'))}\n"
            f"   Intensity: {or_na(row.get('intensity'))}\n"
        )
    return ToolResult(type="text", text="\n".join(lines))
