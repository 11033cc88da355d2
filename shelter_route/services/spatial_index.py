# path: shelter-route-api/shelter_route/services/spatial_index.py

"""
R-tree index over shelter points.

An index is an immutable snapshot: it is bulk-loaded once from a shelter
collection and never modified. Refreshing shelter data builds a new snapshot
(`with_shelters` / `update_shelters`) and `IndexStore` swaps the reference, so
readers holding the old snapshot finish against consistent data.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from rtree import index

from shelter_route.models.shelter_models import ShelterPoint
from shelter_route.utils.geo import (
    LonLat,
    bbox_wgs84,
    ensure_finite_coordinate,
    ensure_polyline,
    haversine_m,
    meters_to_degrees,
    point_to_polyline_m,
)

logger = logging.getLogger(__name__)

# ~100m, ~200m, ~300m at Israel's latitude.
DEFAULT_SEARCH_RADII_DEG: Tuple[float, ...] = (0.001, 0.002, 0.003)


def _point_stream(shelters: Sequence[ShelterPoint]) -> Iterator[Tuple[int, Tuple[float, float, float, float], None]]:
    for i, s in enumerate(shelters):
        yield (i, (s.lon, s.lat, s.lon, s.lat), None)


class ShelterSpatialIndex:
    """Bulk-loaded R-tree; leaf id is the shelter's position in `shelters`."""

    def __init__(
        self,
        shelters: Iterable[ShelterPoint],
        search_radii_deg: Sequence[float] = DEFAULT_SEARCH_RADII_DEG,
    ):
        self._shelters: Tuple[ShelterPoint, ...] = tuple(shelters)
        self._search_radii: Tuple[float, ...] = tuple(search_radii_deg)
        if not self._search_radii:
            raise ValueError("search_radii_deg must not be empty")

        # rtree rejects an empty bulk-load stream.
        if self._shelters:
            self._tree = index.Index(_point_stream(self._shelters))
        else:
            self._tree = index.Index()
        logger.debug("Built shelter index with %d entries", len(self._shelters))

    def __len__(self) -> int:
        return len(self._shelters)

    @property
    def shelters(self) -> Tuple[ShelterPoint, ...]:
        return self._shelters

    @property
    def search_radii_deg(self) -> Tuple[float, ...]:
        return self._search_radii

    def with_shelters(self, shelters: Iterable[ShelterPoint]) -> "ShelterSpatialIndex":
        return ShelterSpatialIndex(shelters, search_radii_deg=self._search_radii)

    def _window(self, min_lon: float, min_lat: float, max_lon: float, max_lat: float) -> List[ShelterPoint]:
        if not self._shelters:
            return []
        ids = sorted(self._tree.intersection((min_lon, min_lat, max_lon, max_lat)))
        return [self._shelters[i] for i in ids]

    def nearest_shelter(self, lat: float, lon: float) -> Optional[ShelterPoint]:
        ensure_finite_coordinate(lat, lon)
        for radius in self._search_radii:
            candidates = self._window(lon - radius, lat - radius, lon + radius, lat + radius)
            if not candidates:
                continue

            nearest = None
            min_dist = math.inf
            for s in candidates:
                d = haversine_m(lat, lon, s.lat, s.lon)
                if d < min_dist:
                    min_dist = d
                    nearest = s
            return nearest
        return None

    def nearest_shelter_distance(self, lat: float, lon: float) -> float:
        nearest = self.nearest_shelter(lat, lon)
        if nearest is None:
            return math.inf
        return haversine_m(lat, lon, nearest.lat, nearest.lon)

    def shelters_within_radius(self, lat: float, lon: float, radius_m: float) -> List[ShelterPoint]:
        ensure_finite_coordinate(lat, lon)
        if not radius_m >= 0:
            raise ValueError(f"radius_m must be >= 0: {radius_m}")

        buf = meters_to_degrees(radius_m)
        candidates = self._window(lon - buf, lat - buf, lon + buf, lat + buf)
        return [s for s in candidates if haversine_m(lat, lon, s.lat, s.lon) <= radius_m]

    def shelters_near_route(self, points_lonlat: Sequence[LonLat], corridor_m: float) -> List[ShelterPoint]:
        ensure_polyline(points_lonlat)
        if not corridor_m >= 0:
            raise ValueError(f"corridor_m must be >= 0: {corridor_m}")

        bbox = bbox_wgs84(points_lonlat)
        buf = meters_to_degrees(corridor_m)
        candidates = self._window(
            bbox["min_lon"] - buf,
            bbox["min_lat"] - buf,
            bbox["max_lon"] + buf,
            bbox["max_lat"] + buf,
        )
        return [
            s for s in candidates
            if point_to_polyline_m(s.lat, s.lon, points_lonlat) <= corridor_m
        ]


class IndexStore:
    """
    Owned handle to the current index snapshot.

    `replace` builds the new index before taking the lock, so queries are never
    blocked by a rebuild; callers should grab one `snapshot()` per scoring pass.
    """

    def __init__(self, initial: Optional[ShelterSpatialIndex] = None):
        self._lock = threading.Lock()
        self._current = initial if initial is not None else ShelterSpatialIndex([])

    def snapshot(self) -> ShelterSpatialIndex:
        with self._lock:
            return self._current

    def replace(self, shelters: Iterable[ShelterPoint]) -> ShelterSpatialIndex:
        new_index = self.snapshot().with_shelters(shelters)
        with self._lock:
            self._current = new_index
        logger.info("Shelter index replaced: %d shelters", len(new_index))
        return new_index


def build_index(shelters: Iterable[ShelterPoint]) -> ShelterSpatialIndex:
    return ShelterSpatialIndex(shelters)


def update_shelters(current: ShelterSpatialIndex, shelters: Iterable[ShelterPoint]) -> ShelterSpatialIndex:
    return current.with_shelters(shelters)


def nearest_shelter(idx: ShelterSpatialIndex, lat: float, lon: float) -> Optional[ShelterPoint]:
    return idx.nearest_shelter(lat, lon)


def shelters_within_radius(idx: ShelterSpatialIndex, lat: float, lon: float, radius_m: float) -> List[ShelterPoint]:
    return idx.shelters_within_radius(lat, lon, radius_m)
