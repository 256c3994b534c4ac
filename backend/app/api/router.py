from __future__ import annotations

from fastapi import APIRouter

from app.api.routes import locations, spots, users


api_router = APIRouter()

api_router.include_router(spots.router, tags=["spots"])
api_router.include_router(locations.router, tags=["locations"])
api_router.include_router(users.router, tags=["users"])
