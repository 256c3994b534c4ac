from __future__ import annotations

import logging

from geoalchemy2 import Geography
from sqlalchemy import Float, cast, func, literal, literal_column
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query

from app.core.errors import StoreError
from app.core.geo import WGS84_SRID
from app.models.spot import Spot
from app.repositories.base import Repository, driver_message


logger = logging.getLogger(__name__)


class SpotRepository(Repository[Spot]):
    model = Spot
    label = "Spot"

    def _distance_expressions(self, lng: float, lat: float, radius_m: int):
        """Return (distance_m, within_radius) SQL expressions for the bound dialect."""
        # Bound as a float: int4 casts would overflow on wide radii.
        radius = literal(float(radius_m), Float)

        if self.db.get_bind().dialect.name == "postgresql":
            geography = Geography(geometry_type="POINT", srid=WGS84_SRID)
            # Generated column maintained by app.db.schema; never written by the app.
            location = literal_column("spots.location", type_=geography)
            origin = cast(func.ST_SetSRID(func.ST_MakePoint(lng, lat), WGS84_SRID), geography)
            return func.ST_Distance(location, origin), func.ST_DWithin(location, origin, radius)

        # haversine_m is registered on every SQLite connection by app.db.session.
        distance = func.haversine_m(Spot.latitude, Spot.longitude, lat, lng)
        return distance, distance <= radius

    def nearby_query(self, lng: float, lat: float, radius_m: int) -> Query:
        distance_expr, within = self._distance_expressions(lng, lat, radius_m)
        distance = distance_expr.label("distance")
        return (
            self.db.query(Spot, distance)
            .filter(within)
            .order_by(distance.asc(), Spot.id.asc())
        )

    def find_nearby(self, lng: float, lat: float, radius_m: int) -> list[tuple[Spot, float]]:
        """Spots within `radius_m` meters of (lng, lat), nearest first."""
        try:
            rows = self.nearby_query(lng, lat, radius_m).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(driver_message(exc)) from exc

        logger.debug("Nearby (%s, %s) r=%sm: %d spot(s)", lng, lat, radius_m, len(rows))
        return [(spot, float(dist)) for spot, dist in rows]
