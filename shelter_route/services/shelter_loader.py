# path: shelter-route-api/shelter_route/services/shelter_loader.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from pydantic import ValidationError

from shelter_route.models.shelter_models import ShelterFilter, ShelterPoint, ShelterType

logger = logging.getLogger(__name__)


def dedupe_by_id(shelters: Iterable[ShelterPoint]) -> Tuple[List[ShelterPoint], int]:
    """Keep the first shelter for each id; returns (kept, dropped_count)."""
    seen = set()
    kept = []
    dropped = 0
    for s in shelters:
        if s.id in seen:
            dropped += 1
            continue
        seen.add(s.id)
        kept.append(s)
    return kept, dropped


def parse_shelter_records(records: Iterable[Any]) -> List[ShelterPoint]:
    shelters = []
    for i, rec in enumerate(records):
        try:
            shelters.append(ShelterPoint.model_validate(rec))
        except ValidationError as e:
            logger.warning("Skipping invalid shelter record #%d: %s", i, e.errors()[0]["msg"])
    kept, dropped = dedupe_by_id(shelters)
    if dropped:
        logger.warning("Dropped %d shelters with duplicate ids", dropped)
    return kept


def load_shelters(path: str | Path) -> List[ShelterPoint]:
    """Read a normalized shelter list: a JSON array or {"shelters": [...]}."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("shelters", [])
    if not isinstance(data, list):
        raise ValueError(f"Shelter file must hold a list of records: {path}")

    shelters = parse_shelter_records(data)
    logger.info("Loaded %d shelters from %s", len(shelters), path)
    return shelters


def filter_shelters(shelters: Iterable[ShelterPoint], flt: ShelterFilter) -> List[ShelterPoint]:
    out = []
    for s in shelters:
        if flt.accessible_only and not s.is_accessible:
            continue
        if s.type == ShelterType.PARKING:
            if flt.include_parking:
                out.append(s)
        elif flt.include_public:
            out.append(s)
    return out
