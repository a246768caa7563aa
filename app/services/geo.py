# app/services/geo.py
import math
from typing import Sequence

from app.models.navigation import BoundingBox, Coordinate, MapRegion, MapSpan

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance_m(a: Coordinate, b: Coordinate) -> float:
    """
    Compute great-circle distance between two points (lat/lon in degrees), in metres.
    """
    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bounding_box(points: Sequence[Coordinate]) -> BoundingBox:
    """
    Smallest lat/lon rectangle enclosing all points.
    """
    if not points:
        raise ValueError("Cannot compute a bounding box of zero points.")

    lats = [p.lat for p in points]
    lons = [p.lon for p in points]
    return BoundingBox(south=min(lats), west=min(lons), north=max(lats), east=max(lons))


def clamp_span(
    lat_delta: float,
    lon_delta: float,
    min_span: float,
    max_lat_span: float,
    max_lon_span: float,
) -> MapSpan:
    return MapSpan(
        lat_delta=min(max(lat_delta, min_span), max_lat_span),
        lon_delta=min(max(lon_delta, min_span), max_lon_span),
    )


def region_for_bounding_box(
    bbox: BoundingBox,
    padding_ratio: float,
    min_span: float,
    max_lat_span: float,
    max_lon_span: float,
) -> MapRegion:
    """
    Region centred on bbox whose span is the bbox span grown by padding_ratio
    on each axis (0.3 -> span * 1.3).

    A degenerate box (single point, straight meridian) falls back to min_span
    on the collapsed axis.
    """
    center = Coordinate(
        lat=(bbox.north + bbox.south) / 2.0,
        lon=(bbox.east + bbox.west) / 2.0,
    )
    lat_delta = (bbox.north - bbox.south) * (1.0 + padding_ratio)
    lon_delta = (bbox.east - bbox.west) * (1.0 + padding_ratio)
    span = clamp_span(lat_delta, lon_delta, min_span, max_lat_span, max_lon_span)
    return MapRegion(center=center, span=span)


def scale_region(
    region: MapRegion,
    factor: float,
    min_span: float,
    max_lat_span: float,
    max_lon_span: float,
) -> MapRegion:
    """
    Multiply both span axes by factor, keeping the centre fixed.
    """
    span = clamp_span(
        region.span.lat_delta * factor,
        region.span.lon_delta * factor,
        min_span,
        max_lat_span,
        max_lon_span,
    )
    return MapRegion(center=region.center, span=span)


def region_viewbox(region: MapRegion) -> str:
    """
    Region bounds as a Nominatim viewbox string: "west,north,east,south".
    """
    half_lat = region.span.lat_delta / 2.0
    half_lon = region.span.lon_delta / 2.0
    west = max(region.center.lon - half_lon, -180.0)
    east = min(region.center.lon + half_lon, 180.0)
    north = min(region.center.lat + half_lat, 90.0)
    south = max(region.center.lat - half_lat, -90.0)
    return f"{west:.6f},{north:.6f},{east:.6f},{south:.6f}"
