import json

import pytest

from conftest import make_shelter
from shelter_route.models.shelter_models import ShelterFilter, ShelterType
from shelter_route.services.shelter_loader import (
    dedupe_by_id,
    filter_shelters,
    load_shelters,
    parse_shelter_records,
)

RECORDS = [
    {"id": "ta-1", "lat": 32.08, "lon": 34.78, "type": "public_shelter", "is_accessible": True, "source_city": "tel-aviv"},
    {"id": "ta-2", "lat": 32.09, "lon": 34.79, "type": "parking_shelter", "capacity": 300, "source_city": "tel-aviv"},
    {"id": "jlm-5", "lat": 31.77, "lon": 35.21, "type": "public_shelter", "source_city": "jerusalem"},
]


def test_parse_records_skips_invalid_and_duplicates():
    records = RECORDS + [
        {"id": "bad-lat", "lat": 132.0, "lon": 34.78},
        {"id": "", "lat": 32.0, "lon": 34.7},
        {"id": "ta-1", "lat": 0.0, "lon": 0.0},
    ]
    shelters = parse_shelter_records(records)
    assert [s.id for s in shelters] == ["ta-1", "ta-2", "jlm-5"]
    assert shelters[0].lat == 32.08
    assert shelters[1].type == ShelterType.PARKING
    assert shelters[1].capacity == 300


def test_load_shelters_list_and_wrapper(tmp_path):
    plain = tmp_path / "plain.json"
    plain.write_text(json.dumps(RECORDS), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"shelters": RECORDS}), encoding="utf-8")

    assert load_shelters(plain) == load_shelters(wrapped)
    assert len(load_shelters(plain)) == 3


def test_load_shelters_rejects_non_list(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"shelters": "nope"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_shelters(path)


def test_dedupe_by_id_counts_dropped():
    a = make_shelter("x", 32.0, 34.0)
    b = make_shelter("x", 32.1, 34.1)
    kept, dropped = dedupe_by_id([a, b])
    assert kept == [a]
    assert dropped == 1


def test_filter_shelters():
    public = make_shelter("p", 32.0, 34.0, is_accessible=True)
    parking = make_shelter("k", 32.0, 34.0, type=ShelterType.PARKING)
    stairwell = make_shelter("s", 32.0, 34.0, type=ShelterType.STAIRWELL)
    shelters = [public, parking, stairwell]

    assert filter_shelters(shelters, ShelterFilter()) == shelters
    assert filter_shelters(shelters, ShelterFilter(accessible_only=True)) == [public]
    assert filter_shelters(shelters, ShelterFilter(include_parking=False)) == [public, stairwell]
    assert filter_shelters(shelters, ShelterFilter(include_public=False)) == [parking]
