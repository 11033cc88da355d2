# path: shelter-route-api/shelter_route/api/routes/shelters.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from shelter_route.api.deps import get_index, get_index_store
from shelter_route.models.shelter_models import (
    NearestShelterResponse,
    ReplaceSheltersRequest,
    ReplaceSheltersResponse,
    ShelterFilter,
    ShelterListResponse,
)
from shelter_route.services.shelter_loader import dedupe_by_id, filter_shelters
from shelter_route.services.spatial_index import IndexStore, ShelterSpatialIndex
from shelter_route.utils.geo import haversine_m

router = APIRouter(prefix="/shelters", tags=["shelters"])


def _filter(
    accessible_only: bool = False,
    include_public: bool = True,
    include_parking: bool = True,
) -> ShelterFilter:
    return ShelterFilter(
        accessible_only=accessible_only,
        include_public=include_public,
        include_parking=include_parking,
    )


@router.get("", response_model=ShelterListResponse)
def list_shelters(
    flt: ShelterFilter = Depends(_filter),
    idx: ShelterSpatialIndex = Depends(get_index),
) -> ShelterListResponse:
    shelters = filter_shelters(idx.shelters, flt)
    return ShelterListResponse(count=len(shelters), shelters=shelters)


@router.put("", response_model=ReplaceSheltersResponse)
def replace_shelters(
    body: ReplaceSheltersRequest,
    store: IndexStore = Depends(get_index_store),
) -> ReplaceSheltersResponse:
    shelters, dropped = dedupe_by_id(body.shelters)
    new_index = store.replace(shelters)
    return ReplaceSheltersResponse(count=len(new_index), dropped_duplicates=dropped)


@router.get("/nearest", response_model=NearestShelterResponse)
def get_nearest_shelter(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    idx: ShelterSpatialIndex = Depends(get_index),
) -> NearestShelterResponse:
    try:
        shelter = idx.nearest_shelter(lat, lon)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if shelter is None:
        return NearestShelterResponse()
    return NearestShelterResponse(
        shelter=shelter,
        distance_m=haversine_m(lat, lon, shelter.lat, shelter.lon),
    )


@router.get("/within", response_model=ShelterListResponse)
def get_shelters_within(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    radius_m: float = Query(default=300.0, ge=0, le=5000),
    flt: ShelterFilter = Depends(_filter),
    idx: ShelterSpatialIndex = Depends(get_index),
) -> ShelterListResponse:
    try:
        found = idx.shelters_within_radius(lat, lon, radius_m)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    shelters = filter_shelters(found, flt)
    return ShelterListResponse(count=len(shelters), shelters=shelters)
