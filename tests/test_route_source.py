from unittest.mock import MagicMock

import pytest
import requests

from shelter_route.config import Settings
from shelter_route.models.route_models import RoutePoint
from shelter_route.services.route_source import (
    RouteSourceError,
    RouteSourceNotConfigured,
    build_request_body,
    get_walking_routes,
    parse_routes,
)

ORIGIN = RoutePoint(lat=32.08, lon=34.78)
DEST = RoutePoint(lat=32.085, lon=34.79)

ORS_RESPONSE = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[34.78, 32.08], [34.785, 32.082], [34.79, 32.085]],
            },
            "properties": {"summary": {"distance": 1234.5, "duration": 888.0}},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[34.78, 32.08], [34.79, 32.085]],
            },
            "properties": {"summary": {"distance": 1400.0, "duration": 1000.0}},
        },
    ],
}


def _session(status=200, payload=None):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.text = "error body"
    response.json.return_value = payload
    session = MagicMock()
    session.post.return_value = response
    return session


def test_build_request_body_requests_alternatives():
    body = build_request_body(ORIGIN, DEST)
    assert body["coordinates"] == [[34.78, 32.08], [34.79, 32.085]]
    assert body["alternative_routes"]["target_count"] == 3


def test_parse_routes():
    routes = parse_routes(ORS_RESPONSE)
    assert len(routes) == 2
    assert routes[0].coordinates[1] == (34.785, 32.082)
    assert routes[0].distance_meters == 1234.5
    assert routes[1].duration_seconds == 1000.0


def test_parse_routes_empty_and_malformed():
    assert parse_routes({"features": []}) == []
    bad = {"features": [{"geometry": {"coordinates": [[34.78, 32.08]]}, "properties": {}}]}
    with pytest.raises(RouteSourceError):
        parse_routes(bad)


def test_get_walking_routes_posts_to_provider(settings):
    session = _session(payload=ORS_RESPONSE)
    routes = get_walking_routes(ORIGIN, DEST, settings=settings, session=session)

    assert len(routes) == 2
    _, kwargs = session.post.call_args
    assert kwargs["headers"]["Authorization"] == "test-key"
    assert kwargs["timeout"] == settings.http_timeout_s


def test_get_walking_routes_http_error(settings):
    with pytest.raises(RouteSourceError):
        get_walking_routes(ORIGIN, DEST, settings=settings, session=_session(status=403))


def test_get_walking_routes_network_error(settings):
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("boom")
    with pytest.raises(RouteSourceError):
        get_walking_routes(ORIGIN, DEST, settings=settings, session=session)


def test_get_walking_routes_requires_key(monkeypatch, settings):
    monkeypatch.delenv("ORS_API_KEY")
    no_key = Settings()
    with pytest.raises(RouteSourceNotConfigured):
        get_walking_routes(ORIGIN, DEST, settings=no_key, session=_session(payload=ORS_RESPONSE))
