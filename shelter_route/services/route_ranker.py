# path: shelter-route-api/shelter_route/services/route_ranker.py

from __future__ import annotations

import logging
from concurrent.futures import Executor
from functools import partial
from typing import List, Optional, Sequence

from shelter_route.config import Settings, get_settings
from shelter_route.models.route_models import RouteCandidate, ScoredRoute
from shelter_route.services.safety_scorer import score_route
from shelter_route.services.spatial_index import ShelterSpatialIndex

logger = logging.getLogger(__name__)


def score_and_rank(
    routes: Sequence[RouteCandidate],
    idx: ShelterSpatialIndex,
    safety_weight: float,
    settings: Optional[Settings] = None,
    executor: Optional[Executor] = None,
) -> List[ScoredRoute]:
    """
    Score every candidate against one index snapshot and order best-first.

    The sort is stable, so routes with equal combined scores keep the
    provider's order.
    """
    if not 0.0 <= safety_weight <= 1.0:
        raise ValueError(f"safety_weight must be within [0, 1]: {safety_weight}")
    if not routes:
        return []

    settings = settings or get_settings()
    scorer = partial(score_route, idx=idx, safety_weight=safety_weight, settings=settings)

    if executor is not None:
        scored = list(executor.map(scorer, routes))
    else:
        scored = [scorer(r) for r in routes]

    ranked = sorted(scored, key=lambda s: s.combined_score)
    logger.info(
        "Ranked %d routes (safety_weight=%.2f, best score=%.1f)",
        len(ranked), safety_weight, ranked[0].metrics.safety_score,
    )
    return ranked
