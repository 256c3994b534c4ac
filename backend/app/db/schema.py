from __future__ import annotations

import logging
import time

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

import app.models  # noqa: F401
from app.core.geo import WGS84_SRID
from app.models.base import Base


logger = logging.getLogger(__name__)


def _ensure_spot_geography(engine: Engine) -> None:
    """Keep a PostGIS geography point in sync with spots.latitude/longitude."""
    if engine.dialect.name != "postgresql":
        return

    existing = {c["name"] for c in inspect(engine).get_columns("spots")}

    statements: list[str] = ["CREATE EXTENSION IF NOT EXISTS postgis"]
    if "location" not in existing:
        statements.append(
            "ALTER TABLE spots ADD COLUMN location geography(Point, {srid}) "
            "GENERATED ALWAYS AS "
            "(ST_SetSRID(ST_MakePoint(longitude, latitude), {srid})::geography) STORED".format(srid=WGS84_SRID)
        )
    statements.append("CREATE INDEX IF NOT EXISTS ix_spots_location ON spots USING GIST (location)")

    with engine.begin() as conn:
        for stmt in statements:
            conn.execute(text(stmt))


def ensure_schema(engine: Engine) -> None:
    # Uvicorn's reload can trigger overlapping startups and DDL isn't atomic with
    # SQLAlchemy's check-then-create, so we retry a few times on transient errors.
    for attempt in range(5):
        try:
            Base.metadata.create_all(bind=engine)
            _ensure_spot_geography(engine)
            logger.info("Schema ready on %s", engine.dialect.name)
            return
        except OperationalError as exc:
            message = str(getattr(exc, "orig", exc))
            is_transient = (
                "already exists" in message
                or "definition is being modified by concurrent DDL" in message
            )
            if is_transient and attempt < 4:
                time.sleep(0.3 * (attempt + 1))
                continue
            raise
