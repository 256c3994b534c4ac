from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float


class LocationCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    latitude: float
    longitude: float


class LocationUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    latitude: float | None = None
    longitude: float | None = None
