"""Shared pieces for the coordinate-based tools."""
import math

from .registry import ToolParam

EARTH_RADIUS_KM = 6371.0


def latitude_param(example: str = "49.5913 for Olomouc, Czech Republic") -> ToolParam:
    return ToolParam(
        "latitude", type="number",
        description=f"Latitude coordinate in decimal degrees (e.g., {example}). Range: -90 to 90.",
        minimum=-90, maximum=90,
    )


def longitude_param(example: str = "17.2634 for Olomouc, Czech Republic") -> ToolParam:
    return ToolParam(
        "longitude", type="number",
        description=f"Longitude coordinate in decimal degrees (e.g., {example}). Range: -180 to 180.",
        minimum=-180, maximum=180,
    )


def haversine_sql(lat_col: str, lon_col: str) -> str:
    """Great-circle distance in km from (:latitude, :longitude) to a row's columns.

    Columns are cast since several source tables store coordinates as text.
    """
    return (
        f"{EARTH_RADIUS_KM:g} * acos(LEAST(1.0, GREATEST(-1.0,\n"
        f"    cos(radians(:latitude)) *\n"
        f"    cos(radians({lat_col}::DOUBLE PRECISION)) *\n"
        f"    cos(radians({lon_col}::DOUBLE PRECISION) - radians(:longitude)) +\n"
        f"    sin(radians(:latitude)) *\n"
        f"    sin(radians({lat_col}::DOUBLE PRECISION))\n"
        f")))"
    )


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def as_float(value, default: float = 0.0) -> float:
    """Row values may be text, Decimal or NULL."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def or_na(value) -> str:
    return "N/A" if value is None else str(value)
