import inspect

import pytest

from shelter_route.services.route_sampler import (
    iter_sample_points,
    route_length_km,
    sample_count,
)
from shelter_route.utils.geo import haversine_m, polyline_length_m


def test_sample_count_minimum_and_spacing():
    assert sample_count(0) == 10
    assert sample_count(100) == 10
    assert sample_count(250) == 10
    assert sample_count(251) == 11
    assert sample_count(1000) == 40
    assert sample_count(1000, spacing_m=50, min_samples=5) == 20
    with pytest.raises(ValueError):
        sample_count(1000, spacing_m=0)


def test_route_length_km(one_km_route):
    assert route_length_km(one_km_route) == pytest.approx(1.0, abs=0.005)


def test_samples_are_lazy(one_km_route):
    assert inspect.isgenerator(iter_sample_points(one_km_route))


def test_sample_length_and_endpoints(one_km_route):
    samples = list(iter_sample_points(one_km_route))
    n = sample_count(polyline_length_m(one_km_route))
    assert len(samples) == n + 1
    assert samples[0] == one_km_route[0]
    assert samples[-1] == one_km_route[-1]


def test_samples_evenly_spaced_on_straight_route(one_km_route):
    samples = list(iter_sample_points(one_km_route))
    steps = [
        haversine_m(a[1], a[0], b[1], b[0])
        for a, b in zip(samples, samples[1:])
    ]
    expected = polyline_length_m(one_km_route) / (len(samples) - 1)
    for step in steps:
        assert step == pytest.approx(expected, abs=0.1)


def test_short_route_gets_minimum_samples():
    route = [(34.78, 32.08), (34.7801, 32.08)]
    assert len(list(iter_sample_points(route))) == 11


def test_samples_follow_polyline_corner():
    # Two equal legs: east then north. The middle sample lands on the corner.
    route = [(34.78, 32.08), (34.79, 32.08), (34.79, 32.088473)]
    legs = polyline_length_m(route[:2]), polyline_length_m(route[1:])
    samples = list(iter_sample_points(route, spacing_m=1000, min_samples=2))
    assert len(samples) == 3
    assert legs[0] == pytest.approx(legs[1], rel=0.01)
    assert samples[1][0] == pytest.approx(34.79, abs=1e-4)
    assert samples[1][1] == pytest.approx(32.08, abs=1e-4)


def test_zero_length_route_repeats_start():
    route = [(34.78, 32.08), (34.78, 32.08)]
    samples = list(iter_sample_points(route))
    assert len(samples) == 11
    assert set(samples) == {(34.78, 32.08)}


def test_invalid_polyline_raises():
    with pytest.raises(ValueError):
        list(iter_sample_points([(34.78, 32.08)]))
