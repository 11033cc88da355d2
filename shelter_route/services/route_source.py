# path: shelter-route-api/shelter_route/services/route_source.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from shelter_route.config import Settings, get_settings
from shelter_route.models.route_models import RouteCandidate, RoutePoint

logger = logging.getLogger(__name__)

ALTERNATIVE_ROUTES = {
    "target_count": 3,
    "weight_factor": 1.6,
    "share_factor": 0.6,
}


class RouteSourceError(RuntimeError):
    pass


class RouteSourceNotConfigured(RouteSourceError):
    pass


def build_request_body(origin: RoutePoint, destination: RoutePoint) -> Dict[str, Any]:
    return {
        "coordinates": [
            [origin.lon, origin.lat],
            [destination.lon, destination.lat],
        ],
        "alternative_routes": dict(ALTERNATIVE_ROUTES),
    }


def parse_routes(data: Dict[str, Any]) -> List[RouteCandidate]:
    """Convert an ORS GeoJSON FeatureCollection into route candidates."""
    routes = []
    for feature in data.get("features") or []:
        summary = (feature.get("properties") or {}).get("summary") or {}
        try:
            routes.append(
                RouteCandidate(
                    coordinates=[(c[0], c[1]) for c in feature["geometry"]["coordinates"]],
                    distance_meters=float(summary.get("distance", 0.0)),
                    duration_seconds=float(summary.get("duration", 0.0)),
                )
            )
        except (KeyError, TypeError, IndexError, ValueError) as e:
            raise RouteSourceError(f"Malformed route in provider response: {e}") from e
    return routes


def get_walking_routes(
    origin: RoutePoint,
    destination: RoutePoint,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> List[RouteCandidate]:
    settings = settings or get_settings()
    if not settings.ors_api_key:
        raise RouteSourceNotConfigured("ORS_API_KEY is not set")

    http = session or requests
    try:
        r = http.post(
            settings.ors_base_url,
            json=build_request_body(origin, destination),
            headers={
                "Content-Type": "application/json",
                "Authorization": settings.ors_api_key,
            },
            timeout=settings.http_timeout_s,
        )
    except requests.RequestException as e:
        logger.error("Route provider request failed: %s", e)
        raise RouteSourceError(f"Route provider unreachable: {e}") from e

    if not r.ok:
        logger.error("Route provider error %s: %s", r.status_code, r.text)
        raise RouteSourceError(f"Route provider error: {r.status_code}")

    routes = parse_routes(r.json())
    logger.info("Route provider returned %d candidate routes", len(routes))
    return routes
