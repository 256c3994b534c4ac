from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.repositories.locations import LocationRepository
from app.repositories.spots import SpotRepository
from app.repositories.users import UserRepository


def get_spot_repository(db: Session = Depends(get_db)) -> SpotRepository:
    return SpotRepository(db)


def get_location_repository(db: Session = Depends(get_db)) -> LocationRepository:
    return LocationRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
