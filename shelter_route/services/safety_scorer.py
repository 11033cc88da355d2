# path: shelter-route-api/shelter_route/services/safety_scorer.py

from __future__ import annotations

import logging
import math
from typing import Optional

from shelter_route.config import Settings, get_settings
from shelter_route.models.route_models import RouteCandidate, RouteMetrics, ScoredRoute
from shelter_route.services.route_sampler import iter_sample_points
from shelter_route.services.spatial_index import ShelterSpatialIndex

logger = logging.getLogger(__name__)

# A 500m worst-case gap removes the full 100 points.
GAP_PENALTY_DIVISOR = 5.0
GAP_PENALTY_CAP = 100.0
# A 200m average distance removes the full 50 points.
AVG_PENALTY_DIVISOR = 4.0
AVG_PENALTY_CAP = 50.0
SHELTER_BONUS_EACH = 3.0
SHELTER_BONUS_CAP = 30.0


def safety_score(max_gap_m: float, avg_distance_m: float, shelters_near_route: int) -> float:
    """0-100, higher is safer. Infinite distances saturate their penalty."""
    gap_penalty = min(GAP_PENALTY_CAP, max_gap_m / GAP_PENALTY_DIVISOR)
    avg_penalty = min(AVG_PENALTY_CAP, avg_distance_m / AVG_PENALTY_DIVISOR)
    shelter_bonus = min(SHELTER_BONUS_CAP, shelters_near_route * SHELTER_BONUS_EACH)
    return max(0.0, min(100.0, 100.0 - gap_penalty - avg_penalty + shelter_bonus))


def compute_route_metrics(
    route: RouteCandidate,
    idx: ShelterSpatialIndex,
    settings: Optional[Settings] = None,
) -> RouteMetrics:
    settings = settings or get_settings()

    distances = [
        idx.nearest_shelter_distance(lat, lon)
        for lon, lat in iter_sample_points(
            route.coordinates,
            spacing_m=settings.sample_spacing_m,
            min_samples=settings.min_samples,
        )
    ]

    max_gap = max(distances)
    min_dist = min(distances)
    avg_dist = math.fsum(distances) / len(distances)
    near_count = len(idx.shelters_near_route(route.coordinates, settings.scoring_corridor_m))

    score = safety_score(max_gap, avg_dist, near_count)
    logger.debug(
        "Route metrics: samples=%d max_gap=%.1f avg=%.1f near=%d score=%.1f",
        len(distances), max_gap, avg_dist, near_count, score,
    )

    return RouteMetrics(
        distance_km=route.distance_meters / 1000.0,
        duration_minutes=route.duration_seconds / 60.0,
        min_distance_to_shelter=min_dist,
        max_gap_to_shelter=max_gap,
        avg_distance_to_shelter=avg_dist,
        shelters_near_route=near_count,
        safety_score=score,
    )


def combined_score(metrics: RouteMetrics, safety_weight: float, max_walk_km: float = 10.0) -> float:
    """Lower is better: blends normalized distance with normalized risk."""
    if not 0.0 <= safety_weight <= 1.0:
        raise ValueError(f"safety_weight must be within [0, 1]: {safety_weight}")

    normalized_distance = metrics.distance_km / max_walk_km
    normalized_risk = 1.0 - metrics.safety_score / 100.0
    return (1.0 - safety_weight) * normalized_distance + safety_weight * normalized_risk


def score_route(
    route: RouteCandidate,
    idx: ShelterSpatialIndex,
    safety_weight: float,
    settings: Optional[Settings] = None,
) -> ScoredRoute:
    settings = settings or get_settings()
    metrics = compute_route_metrics(route, idx, settings)
    return ScoredRoute(
        route=route,
        metrics=metrics,
        nearby_shelters=idx.shelters_near_route(route.coordinates, settings.display_corridor_m),
        combined_score=combined_score(metrics, safety_weight, settings.max_walk_km),
    )
