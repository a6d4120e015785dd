"""Meteo tools: Olomouc weather stations and their readings (PostgreSQL)."""
import logging

from ..geo import as_float, haversine_sql, latitude_param, longitude_param, or_na
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

MAX_READINGS = 100

_READINGS_SQL = f"""
    SELECT * FROM (
        SELECT
            "LAT", "LON", "NAME", "TIMESTAMP", "PRESSURE", "HUMIDITY",
            "WIND_DIRECTION", "WIND_SPEED", "TEMPERATURE_ADULT", "TEMPERATURE_CHILD",
            "SOLAR_RADIATION", "PRECIPITATION",
            ({haversine_sql('"LAT"', '"LON"')}) AS distance_km
        FROM public."meteo_data"
        WHERE "TIMESTAMP"::date = :data_date
    ) AS subquery
    WHERE distance_km <= :distance
    ORDER BY "TIMESTAMP" DESC, distance_km ASC
    LIMIT :limit
"""

_STATIONS_SQL = f"""
    SELECT * FROM (
        SELECT
            "NAZEV", "LAT", "LON",
            ({haversine_sql('"LAT"', '"LON"')}) AS distance_km
        FROM public."meteostanice_mesta_Olomouc"
    ) AS subquery
    WHERE distance_km <= :distance_km
    ORDER BY distance_km ASC
"""

_STATION_NAMES_SQL = 'SELECT DISTINCT "NAZEV" FROM public."meteostanice_mesta_Olomouc" ORDER BY "NAZEV"'


def _data_date(ctx):
    configured = ctx.settings.meteo_data_date
    return configured or ctx.clock.now("UTC").date()


@register_tool(
    "get-weather-near-location",
    description=(
        "Retrieves the most recent weather data from meteorological stations near a specified geographic "
        "location for today. Searches within a given radius (in kilometers) from the provided coordinates "
        "and returns measurements including temperature, humidity, pressure, wind speed/direction, and "
        "precipitation data from nearby weather stations. Results are sorted by most recent timestamp first, "
        "then by distance from the specified location."
    ),
    params=[
        latitude_param(),
        longitude_param(),
        ToolParam("distance", type="number",
                  description="Search radius in kilometers from the specified coordinates. Default is 1.0 km.",
                  required=False, default=1.0, minimum=0.1, maximum=100),
        ToolParam("limit", type="integer",
                  description="Maximum number of weather station readings to return. Default is 10.",
                  required=False, default=10),
    ],
    annotations=ToolAnnotations(title="Meteorological Data Tool"),
)
async def weather_near_location(ctx, latitude: float, longitude: float, distance: float = 1.0,
                                limit: int = 10, **kwargs) -> ToolResult:
    limit = min(max(limit, 1), MAX_READINGS)
    rows = await ctx.db.query(_READINGS_SQL, {
        "latitude": latitude,
        "longitude": longitude,
        "distance": distance,
        "limit": limit,
        "data_date": _data_date(ctx),
    })

    if not rows:
        return ToolResult(
            type="text",
            text=(f"No meteorological data found within {distance:.1f} km of coordinates "
                  f"({latitude:.4f}, {longitude:.4f}) for today."),
        )

    lines = [
        f"Found {len(rows)} weather station reading(s) within {distance:.1f} km of "
        f"({latitude:.4f}, {longitude:.4f}):\n"
    ]
    for i, row in enumerate(rows, 1):
        lines.append(
            f"Station #{i}: {or_na(row.get('NAME'))}\n"
            f"  Distance: {as_float(row.get('distance_km')):.2f} km\n"
            f"  Location: Lat {as_float(row.get('LAT')):.4f}, Lon {as_float(row.get('LON')):.4f}\n"
            f"  Timestamp: {or_na(row.get('TIMESTAMP'))}\n"
            f"  Temperature: Adult {as_float(row.get('TEMPERATURE_ADULT')):.1f}°C, "
            f"Child {as_float(row.get('TEMPERATURE_CHILD')):.1f}°C\n"
            f"  Pressure: {or_na(row.get('PRESSURE'))} hPa\n"
            f"  Humidity: {or_na(row.get('HUMIDITY'))}%\n"
            f"  Wind: {as_float(row.get('WIND_SPEED')):.1f} km/h from {or_na(row.get('WIND_DIRECTION'))}°\n"
            f"  Solar Radiation: {or_na(row.get('SOLAR_RADIATION'))} W/m²\n"
            f"  Precipitation: {or_na(row.get('PRECIPITATION'))} mm\n"
        )
    return ToolResult(type="text", text="\n".join(lines))


@register_tool(
    "find-nearby-meteostations",
    description=(
        "Find meteostations within a specified distance from given coordinates. Uses the Haversine formula "
        "to calculate distances between coordinates and returns stations sorted by proximity."
    ),
    params=[
        ToolParam("latitude", type="number",
                  description="Latitude of the search origin point in decimal degrees (e.g., 49.5938)",
                  minimum=-90, maximum=90),
        ToolParam("longitude", type="number",
                  description="Longitude of the search origin point in decimal degrees (e.g., 17.2509)",
                  minimum=-180, maximum=180),
        ToolParam("distance_km", type="number",
                  description="Search radius in kilometers from the given coordinates",
                  required=False, default=1.0, minimum=0.1, maximum=100),
    ],
    annotations=ToolAnnotations(title="Meteorological Station Finder Tool"),
)
async def find_nearby_meteostations(ctx, latitude: float, longitude: float, distance_km: float = 1.0,
                                    **kwargs) -> ToolResult:
    rows = await ctx.db.query(_STATIONS_SQL, {
        "latitude": latitude,
        "longitude": longitude,
        "distance_km": distance_km,
    })

    if not rows:
        return ToolResult(
            type="text",
            text=(f"No weather stations found within {distance_km:.1f} km of coordinates "
                  f"({latitude:.4f}, {longitude:.4f})."),
        )

    lines = [
        f"Found {len(rows)} weather station(s) within {distance_km:.1f} km of "
        f"({latitude:.4f}, {longitude:.4f}):\n"
    ]
    for i, row in enumerate(rows, 1):
        lines.append(
            f"{i}. {or_na(row.get('NAZEV'))}\n"
            f"   Distance: {as_float(row.get('distance_km')):.2f} km\n"
            f"   Location: Lat {as_float(row.get('LAT')):.4f}, Lon {as_float(row.get('LON')):.4f}\n"
        )
    return ToolResult(type="text", text="\n".join(lines))


@register_tool(
    "get-meteostanice-nazev",
    description=(
        'Connects to PostgreSQL database and returns unique values from the "nazev" column '
        "in the meteostanice_mesta_Olomouc table"
    ),
    params=[],
    annotations=ToolAnnotations(title="PostgreSQL Meteostanice Tool"),
)
async def meteostation_names(ctx, **kwargs) -> ToolResult:
    rows = await ctx.db.query(_STATION_NAMES_SQL)
    if not rows:
        return ToolResult(type="text", text='No unique values found in the "nazev" column.')

    values = [row.get("NAZEV") for row in rows]
    listing = "\n".join(f"- {v if v is not None else '(NULL)'}" for v in values)
    return ToolResult(
        type="text",
        text=f'Found {len(values)} unique value(s) in the "nazev" column:\n\n{listing}',
    )
