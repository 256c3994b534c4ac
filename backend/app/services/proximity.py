from __future__ import annotations

import math
import re
from dataclasses import dataclass

from app.core.errors import BadRequestError


_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)

# Radius is a signed 64-bit count of meters.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class NearbyQuery:
    lng: float
    lat: float
    distance: int


def _parse_float(raw: str | None) -> float | None:
    # float() alone would also take padding, "1_000" and non-ASCII digits.
    if raw is None or not raw.isascii() or "_" in raw or raw != raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_int(raw: str | None) -> int | None:
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if INT64_MIN <= value <= INT64_MAX else None


def parse_nearby_params(lng: str | None, lat: str | None, distance: str | None) -> NearbyQuery:
    """Parse the raw query strings; any bad value rejects the whole request.

    A negative distance parses fine and simply matches nothing.
    """
    parsed_lng = _parse_float(lng)
    parsed_lat = _parse_float(lat)
    parsed_distance = _parse_int(distance)

    if parsed_lng is None or parsed_lat is None or parsed_distance is None:
        raise BadRequestError("Invalid query parameters")

    return NearbyQuery(lng=parsed_lng, lat=parsed_lat, distance=parsed_distance)
