# path: shelter-route-api/shelter_route/models/shelter_models.py

from __future__ import annotations

from enum import Enum
import math
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class ShelterType(str, Enum):
    PUBLIC = "public_shelter"
    ACCESSIBLE = "accessible_shelter"
    PARKING = "parking_shelter"
    STAIRWELL = "stairwell"
    OTHER = "other"


class ShelterPoint(BaseModel):
    """One normalized protected space. Never mutated after ingestion."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    address: Optional[str] = None
    type: ShelterType = ShelterType.OTHER
    is_accessible: bool = False
    capacity: Optional[int] = Field(default=None, ge=0)
    is_open: Optional[bool] = None
    opening_times: Optional[str] = None
    source_city: str = "unknown"

    @field_validator("lat", "lon")
    @classmethod
    def validate_finite(cls, v: float):
        if not math.isfinite(v):
            raise ValueError("coordinate must be finite")
        return v


class ShelterFilter(BaseModel):
    accessible_only: bool = False
    include_public: bool = True
    include_parking: bool = True


class NearestShelterResponse(BaseModel):
    shelter: Optional[ShelterPoint] = None
    distance_m: Optional[float] = None

    @field_serializer("distance_m", when_used="json")
    def serialize_distance(self, v: Optional[float]):
        if v is None or not math.isfinite(v):
            return None
        return v


class ShelterListResponse(BaseModel):
    count: int = Field(ge=0)
    shelters: List[ShelterPoint] = Field(default_factory=list)


class ReplaceSheltersRequest(BaseModel):
    shelters: List[ShelterPoint]


class ReplaceSheltersResponse(BaseModel):
    count: int = Field(ge=0)
    dropped_duplicates: int = Field(ge=0)
