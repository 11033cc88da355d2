import pytest

from shelter_route.config import Settings
from shelter_route.models.shelter_models import ShelterPoint, ShelterType

# Straight ~1 km eastward line at Tel Aviv's latitude.
TLV_LAT = 32.08
TLV_LON = 34.78
ONE_KM_DLON = 0.010614


def make_shelter(sid, lat, lon, **kw):
    kw.setdefault("type", ShelterType.PUBLIC)
    kw.setdefault("source_city", "tel-aviv")
    return ShelterPoint(id=sid, lat=lat, lon=lon, **kw)


@pytest.fixture
def settings(monkeypatch):
    for name in (
        "ORS_API_KEY",
        "SCORING_CORRIDOR_M",
        "DISPLAY_CORRIDOR_M",
        "SAMPLE_SPACING_M",
        "MIN_SAMPLES",
        "MAX_WALK_KM",
        "GEOCODER_AREA_SUFFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ORS_API_KEY", "test-key")
    return Settings()


@pytest.fixture
def line_shelters():
    # One shelter every 0.001 deg of longitude along the 1 km line.
    return [
        make_shelter(f"ta-{i}", TLV_LAT, round(TLV_LON + i * 0.001, 6))
        for i in range(11)
    ]


@pytest.fixture
def one_km_route():
    return [(TLV_LON, TLV_LAT), (TLV_LON + ONE_KM_DLON, TLV_LAT)]
