# path: shelter-route-api/shelter_route/models/route_models.py

from __future__ import annotations

import math
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from shelter_route.models.shelter_models import ShelterPoint


class RoutePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    address: Optional[str] = None


class RouteCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinates: List[Tuple[float, float]]  # (lon, lat)
    distance_meters: float = Field(ge=0)
    duration_seconds: float = Field(ge=0)

    @field_validator("coordinates")
    @classmethod
    def validate_coords(cls, coords: List[Tuple[float, float]]):
        if len(coords) < 2:
            raise ValueError("Route must contain at least 2 coordinates")
        for lon, lat in coords:
            if not (math.isfinite(lon) and math.isfinite(lat)):
                raise ValueError(f"coordinate must be finite: ({lon}, {lat})")
            if not (-180.0 <= lon <= 180.0):
                raise ValueError(f"lon out of range [-180,180]: {lon}")
            if not (-90.0 <= lat <= 90.0):
                raise ValueError(f"lat out of range [-90,90]: {lat}")
        return coords


class RouteMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(ge=0)
    duration_minutes: float = Field(ge=0)
    # Meters; inf when some sample point has no shelter within search range.
    min_distance_to_shelter: float
    max_gap_to_shelter: float
    avg_distance_to_shelter: float
    shelters_near_route: int = Field(ge=0)
    safety_score: float = Field(ge=0, le=100)

    @field_serializer(
        "min_distance_to_shelter",
        "max_gap_to_shelter",
        "avg_distance_to_shelter",
        when_used="json",
    )
    def serialize_distance(self, v: float):
        return v if math.isfinite(v) else None


class ScoredRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    route: RouteCandidate
    metrics: RouteMetrics
    nearby_shelters: List[ShelterPoint] = Field(default_factory=list)
    combined_score: float


class ScoreRoutesRequest(BaseModel):
    routes: List[RouteCandidate]
    safety_weight: float = Field(default=0.5, ge=0, le=1)


class PlanRouteRequest(BaseModel):
    origin: RoutePoint
    destination: RoutePoint
    safety_weight: float = Field(default=0.5, ge=0, le=1)


class RankedRoutesResponse(BaseModel):
    safety_weight: float
    routes: List[ScoredRoute]
