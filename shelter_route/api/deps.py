# path: shelter-route-api/shelter_route/api/deps.py

from __future__ import annotations

from fastapi import Request

from shelter_route.config import Settings, get_settings
from shelter_route.services.spatial_index import IndexStore, ShelterSpatialIndex


def get_index_store(request: Request) -> IndexStore:
    return request.app.state.index_store


def get_index(request: Request) -> ShelterSpatialIndex:
    # One snapshot per request; a concurrent refresh does not affect it.
    return get_index_store(request).snapshot()


def get_app_settings() -> Settings:
    return get_settings()
