from __future__ import annotations

from app.models.location import Location
from app.repositories.base import Repository


class LocationRepository(Repository[Location]):
    model = Location
    label = "Location"
