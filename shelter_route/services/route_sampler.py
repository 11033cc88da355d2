# path: shelter-route-api/shelter_route/services/route_sampler.py

from __future__ import annotations

import math
from typing import Iterator, List, Sequence, Tuple

from shelter_route.utils.geo import LonLat, ensure_polyline, haversine_m

DEFAULT_SPACING_M = 25.0
MIN_SAMPLES = 10


def route_length_km(points_lonlat: Sequence[LonLat]) -> float:
    ensure_polyline(points_lonlat)
    return sum(_segment_lengths(points_lonlat)) / 1000.0


def sample_count(length_m: float, spacing_m: float = DEFAULT_SPACING_M, min_samples: int = MIN_SAMPLES) -> int:
    if spacing_m <= 0:
        raise ValueError(f"spacing_m must be > 0: {spacing_m}")
    return max(min_samples, math.ceil(length_m / spacing_m))


def _segment_lengths(points_lonlat: Sequence[LonLat]) -> List[float]:
    segs = []
    for i in range(1, len(points_lonlat)):
        a_lon, a_lat = points_lonlat[i - 1]
        b_lon, b_lat = points_lonlat[i]
        segs.append(haversine_m(a_lat, a_lon, b_lat, b_lon))
    return segs


def iter_sample_points(
    points_lonlat: Sequence[LonLat],
    spacing_m: float = DEFAULT_SPACING_M,
    min_samples: int = MIN_SAMPLES,
) -> Iterator[Tuple[float, float]]:
    """
    Yield n+1 (lon, lat) points at arc-length fractions 0, 1/n, ..., 1.

    Points are interpolated linearly inside the enclosing segment. The first
    and last vertices are yielded exactly.
    """
    ensure_polyline(points_lonlat)
    segs = _segment_lengths(points_lonlat)
    total = sum(segs)
    n = sample_count(total, spacing_m, min_samples)

    seg_idx = 0
    seg_start_cum = 0.0
    for i in range(n + 1):
        if i == 0:
            yield tuple(points_lonlat[0])
            continue
        if i == n:
            yield tuple(points_lonlat[-1])
            continue

        t = total * i / n
        while seg_idx < len(segs) - 1 and seg_start_cum + segs[seg_idx] < t:
            seg_start_cum += segs[seg_idx]
            seg_idx += 1

        a_lon, a_lat = points_lonlat[seg_idx]
        b_lon, b_lat = points_lonlat[seg_idx + 1]
        seg_len = segs[seg_idx]
        if seg_len == 0:
            yield (a_lon, a_lat)
            continue
        frac = min(1.0, max(0.0, (t - seg_start_cum) / seg_len))
        yield (a_lon + frac * (b_lon - a_lon), a_lat + frac * (b_lat - a_lat))
