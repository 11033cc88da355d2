# path: shelter-route-api/shelter_route/utils/geo.py

from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple
import math

EARTH_RADIUS_M = 6371000.0
# Approximate meters per degree of latitude; close enough at city scale (~32N).
METERS_PER_DEGREE = 111000.0

LonLat = Tuple[float, float]


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(s)))


def meters_to_degrees(meters: float) -> float:
    return meters / METERS_PER_DEGREE


def ensure_finite_coordinate(lat: float, lon: float) -> None:
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"Coordinate must be finite: lat={lat}, lon={lon}")


def ensure_polyline(points_lonlat: Sequence[LonLat]) -> None:
    if len(points_lonlat) < 2:
        raise ValueError("Route polyline must contain at least 2 coordinates")
    for lon, lat in points_lonlat:
        ensure_finite_coordinate(lat, lon)


def bbox_wgs84(points_lonlat: Iterable[LonLat]) -> Dict[str, float]:
    points = list(points_lonlat)
    lons = [p[0] for p in points]
    lats = [p[1] for p in points]
    return {
        "min_lat": min(lats),
        "min_lon": min(lons),
        "max_lat": max(lats),
        "max_lon": max(lons),
    }


def polyline_length_m(points_lonlat: Sequence[LonLat]) -> float:
    total = 0.0
    for i in range(1, len(points_lonlat)):
        a_lon, a_lat = points_lonlat[i - 1]
        b_lon, b_lat = points_lonlat[i]
        total += haversine_m(a_lat, a_lon, b_lat, b_lon)
    return total


def point_to_segment_m(lat: float, lon: float, a: LonLat, b: LonLat) -> float:
    """
    Distance in meters from (lat, lon) to the segment a-b, both ends given as (lon, lat).

    The segment is projected onto a local equirectangular plane centred on the
    query point to find the closest point; the distance to that point is then
    measured with haversine.
    """
    a_lon, a_lat = a
    b_lon, b_lat = b

    ky = math.radians(1.0) * EARTH_RADIUS_M
    kx = ky * math.cos(math.radians(lat))

    ax = (a_lon - lon) * kx
    ay = (a_lat - lat) * ky
    dx = (b_lon - a_lon) * kx
    dy = (b_lat - a_lat) * ky

    seg_len2 = dx * dx + dy * dy
    if seg_len2 == 0:
        t = 0.0
    else:
        t = -(ax * dx + ay * dy) / seg_len2
        t = min(1.0, max(0.0, t))

    c_lon = a_lon + t * (b_lon - a_lon)
    c_lat = a_lat + t * (b_lat - a_lat)
    return haversine_m(lat, lon, c_lat, c_lon)


def point_to_polyline_m(lat: float, lon: float, points_lonlat: Sequence[LonLat]) -> float:
    best = math.inf
    for i in range(1, len(points_lonlat)):
        d = point_to_segment_m(lat, lon, points_lonlat[i - 1], points_lonlat[i])
        if d < best:
            best = d
    return best
