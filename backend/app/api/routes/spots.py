from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Response

from app.api.deps import get_spot_repository
from app.repositories.spots import SpotRepository
from app.schemas.spots import SpotCreateIn, SpotNearbyOut, SpotOut, SpotUpdateIn
from app.services.proximity import parse_nearby_params


router = APIRouter(prefix="/spots")


@router.get("", response_model=list[SpotOut])
def list_spots(repo: SpotRepository = Depends(get_spot_repository)):
    return [SpotOut.model_validate(s) for s in repo.list_all()]


# Declared before /{spot_id} so "nearby" is never parsed as an id.
@router.get("/nearby", response_model=list[SpotNearbyOut])
def nearby_spots(
    lng: str | None = Query(None, description="Longitude, decimal degrees"),
    lat: str | None = Query(None, description="Latitude, decimal degrees"),
    distance: str | None = Query(None, description="Radius in meters"),
    repo: SpotRepository = Depends(get_spot_repository),
):
    query = parse_nearby_params(lng, lat, distance)
    rows = repo.find_nearby(query.lng, query.lat, query.distance)
    return [SpotNearbyOut(**SpotOut.model_validate(s).model_dump(), distance=d) for s, d in rows]


@router.get("/{spot_id}", response_model=SpotOut)
def get_spot(spot_id: uuid.UUID, repo: SpotRepository = Depends(get_spot_repository)):
    return SpotOut.model_validate(repo.get_by_id(spot_id))


@router.post("", response_model=SpotOut, status_code=201)
def create_spot(payload: SpotCreateIn, repo: SpotRepository = Depends(get_spot_repository)):
    spot = repo.create(payload.model_dump())
    return SpotOut.model_validate(spot)


@router.put("/{spot_id}", response_model=SpotOut)
def update_spot(spot_id: uuid.UUID, payload: SpotUpdateIn, repo: SpotRepository = Depends(get_spot_repository)):
    # Only fields present in the body are written; omitted fields keep their values.
    spot = repo.update(spot_id, payload.model_dump(exclude_unset=True))
    return SpotOut.model_validate(spot)


@router.delete("/{spot_id}", status_code=204)
def delete_spot(spot_id: uuid.UUID, repo: SpotRepository = Depends(get_spot_repository)):
    repo.delete(spot_id)
    return Response(status_code=204)
