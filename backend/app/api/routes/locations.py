from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.api.deps import get_location_repository
from app.core.errors import PlainTextErrorRoute
from app.repositories.locations import LocationRepository
from app.schemas.locations import LocationCreateIn, LocationOut, LocationUpdateIn


router = APIRouter(prefix="/locations", route_class=PlainTextErrorRoute)


@router.get("", response_model=list[LocationOut])
def list_locations(repo: LocationRepository = Depends(get_location_repository)):
    return [LocationOut.model_validate(loc) for loc in repo.list_all()]


@router.get("/{location_id}", response_model=LocationOut)
def get_location(location_id: int, repo: LocationRepository = Depends(get_location_repository)):
    return LocationOut.model_validate(repo.get_by_id(location_id))


@router.post("", response_model=LocationOut, status_code=201)
def create_location(payload: LocationCreateIn, repo: LocationRepository = Depends(get_location_repository)):
    return LocationOut.model_validate(repo.create(payload.model_dump()))


@router.put("/{location_id}", response_model=LocationOut)
def update_location(
    location_id: int,
    payload: LocationUpdateIn,
    repo: LocationRepository = Depends(get_location_repository),
):
    location = repo.update(location_id, payload.model_dump(exclude_unset=True))
    return LocationOut.model_validate(location)


@router.delete("/{location_id}", status_code=204)
def delete_location(location_id: int, repo: LocationRepository = Depends(get_location_repository)):
    repo.delete(location_id)
    return Response(status_code=204)
