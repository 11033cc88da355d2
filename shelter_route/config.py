# path: shelter-route-api/shelter_route/config.py

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    ors_api_key: str
    ors_base_url: str
    nominatim_base_url: str
    geocoder_user_agent: str
    geocoder_area_suffix: str
    http_timeout_s: float
    shelters_file: str
    scoring_corridor_m: float
    display_corridor_m: float
    sample_spacing_m: float
    min_samples: int
    max_walk_km: float
    log_level: str

    def __init__(self):
        object.__setattr__(self, "ors_api_key", os.getenv("ORS_API_KEY", "").strip())
        object.__setattr__(
            self,
            "ors_base_url",
            os.getenv(
                "ORS_BASE_URL",
                "https://api.openrouteservice.org/v2/directions/foot-walking/geojson",
            ).strip(),
        )
        object.__setattr__(
            self,
            "nominatim_base_url",
            os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org").strip(),
        )
        object.__setattr__(
            self,
            "geocoder_user_agent",
            os.getenv("GEOCODER_USER_AGENT", "shelter-route-api/0.1").strip(),
        )
        object.__setattr__(
            self,
            "geocoder_area_suffix",
            os.getenv("GEOCODER_AREA_SUFFIX", "Tel Aviv, Israel").strip(),
        )
        object.__setattr__(
            self, "http_timeout_s", float(os.getenv("HTTP_TIMEOUT_S", "20").strip())
        )
        object.__setattr__(self, "shelters_file", os.getenv("SHELTERS_FILE", "").strip())
        object.__setattr__(
            self,
            "scoring_corridor_m",
            float(os.getenv("SCORING_CORRIDOR_M", "150").strip()),
        )
        object.__setattr__(
            self,
            "display_corridor_m",
            float(os.getenv("DISPLAY_CORRIDOR_M", "200").strip()),
        )
        object.__setattr__(
            self, "sample_spacing_m", float(os.getenv("SAMPLE_SPACING_M", "25").strip())
        )
        object.__setattr__(self, "min_samples", int(os.getenv("MIN_SAMPLES", "10").strip()))
        object.__setattr__(self, "max_walk_km", float(os.getenv("MAX_WALK_KM", "10").strip()))
        object.__setattr__(self, "log_level", os.getenv("LOG_LEVEL", "INFO").strip().upper())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
