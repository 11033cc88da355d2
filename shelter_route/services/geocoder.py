# path: shelter-route-api/shelter_route/services/geocoder.py

from __future__ import annotations

import logging
from typing import Optional

import requests

from shelter_route.config import Settings, get_settings
from shelter_route.models.route_models import RoutePoint

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"


class GeocodingError(RuntimeError):
    pass


def geocode_address(
    address: str,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> Optional[RoutePoint]:
    settings = settings or get_settings()
    http = session or requests

    query = address.strip()
    if settings.geocoder_area_suffix:
        query = f"{query}, {settings.geocoder_area_suffix}"

    try:
        r = http.get(
            f"{settings.nominatim_base_url}/search",
            params={"q": query, "format": "json", "limit": 1, "addressdetails": 1},
            headers={"User-Agent": settings.geocoder_user_agent},
            timeout=settings.http_timeout_s,
        )
        r.raise_for_status()
    except requests.RequestException as e:
        logger.error("Geocoding failed for %r: %s", address, e)
        raise GeocodingError(f"Geocoding failed: {e}") from e

    results = r.json()
    if not results:
        return None

    result = results[0]
    return RoutePoint(
        lat=float(result["lat"]),
        lon=float(result["lon"]),
        address=result.get("display_name"),
    )


def reverse_geocode(
    lat: float,
    lon: float,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> str:
    # Never raises; the caller only needs a label.
    settings = settings or get_settings()
    http = session or requests
    try:
        r = http.get(
            f"{settings.nominatim_base_url}/reverse",
            params={"lat": lat, "lon": lon, "format": "json"},
            headers={"User-Agent": settings.geocoder_user_agent},
            timeout=settings.http_timeout_s,
        )
        r.raise_for_status()
        return r.json().get("display_name") or UNKNOWN_LOCATION
    except (requests.RequestException, ValueError) as e:
        logger.warning("Reverse geocoding failed for (%s, %s): %s", lat, lon, e)
        return UNKNOWN_LOCATION
