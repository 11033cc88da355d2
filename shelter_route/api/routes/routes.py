# path: shelter-route-api/shelter_route/api/routes/routes.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from shelter_route.api.deps import get_app_settings, get_index
from shelter_route.config import Settings
from shelter_route.models.route_models import (
    PlanRouteRequest,
    RankedRoutesResponse,
    ScoreRoutesRequest,
)
from shelter_route.services.route_ranker import score_and_rank
from shelter_route.services.route_source import (
    RouteSourceError,
    RouteSourceNotConfigured,
    get_walking_routes,
)
from shelter_route.services.spatial_index import ShelterSpatialIndex

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/score", response_model=RankedRoutesResponse)
def score_routes(
    body: ScoreRoutesRequest,
    idx: ShelterSpatialIndex = Depends(get_index),
    settings: Settings = Depends(get_app_settings),
) -> RankedRoutesResponse:
    try:
        ranked = score_and_rank(body.routes, idx, body.safety_weight, settings=settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RankedRoutesResponse(safety_weight=body.safety_weight, routes=ranked)


@router.post("/plan", response_model=RankedRoutesResponse)
def plan_route(
    body: PlanRouteRequest,
    idx: ShelterSpatialIndex = Depends(get_index),
    settings: Settings = Depends(get_app_settings),
) -> RankedRoutesResponse:
    try:
        candidates = get_walking_routes(body.origin, body.destination, settings=settings)
    except RouteSourceNotConfigured as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RouteSourceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    try:
        ranked = score_and_rank(candidates, idx, body.safety_weight, settings=settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RankedRoutesResponse(safety_weight=body.safety_weight, routes=ranked)
