# path: shelter-route-api/shelter_route/api/routes/geocode.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from shelter_route.api.deps import get_app_settings
from shelter_route.config import Settings
from shelter_route.models.route_models import RoutePoint
from shelter_route.services.geocoder import GeocodingError, geocode_address, reverse_geocode

router = APIRouter(prefix="/geocode", tags=["geocode"])


class ReverseGeocodeResponse(BaseModel):
    lat: float
    lon: float
    address: str


@router.get("", response_model=RoutePoint)
def geocode(
    q: str = Query(min_length=1, max_length=200),
    settings: Settings = Depends(get_app_settings),
) -> RoutePoint:
    try:
        point = geocode_address(q, settings=settings)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if point is None:
        raise HTTPException(status_code=404, detail=f"No match for address: {q}")
    return point


@router.get("/reverse", response_model=ReverseGeocodeResponse)
def reverse(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    settings: Settings = Depends(get_app_settings),
) -> ReverseGeocodeResponse:
    return ReverseGeocodeResponse(lat=lat, lon=lon, address=reverse_geocode(lat, lon, settings=settings))
