from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SpotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    category: str
    type: str
    latitude: float
    longitude: float
    address: str | None = None
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class SpotNearbyOut(SpotOut):
    distance: float = Field(description="Distance in meters from the query point")


class SpotCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(min_length=1, max_length=20)
    type: str = Field(min_length=1, max_length=50)
    latitude: float
    longitude: float
    address: str | None = None
    image_url: str | None = None


class SpotUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=20)
    type: str | None = Field(default=None, min_length=1, max_length=50)
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    image_url: str | None = None
