from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.api.deps import get_user_repository
from app.core.errors import PlainTextErrorRoute
from app.repositories.users import UserRepository
from app.schemas.users import UserCreateIn, UserOut, UserUpdateIn


router = APIRouter(prefix="/users", route_class=PlainTextErrorRoute)


def _normalize_email(value: str) -> str:
    return value.strip().lower()


@router.get("", response_model=list[UserOut])
def list_users(repo: UserRepository = Depends(get_user_repository)):
    return [UserOut.model_validate(u) for u in repo.list_all()]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    return UserOut.model_validate(repo.get_by_id(user_id))


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreateIn, repo: UserRepository = Depends(get_user_repository)):
    fields = payload.model_dump()
    fields["email"] = _normalize_email(fields["email"])
    return UserOut.model_validate(repo.create(fields))


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdateIn, repo: UserRepository = Depends(get_user_repository)):
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("email") is not None:
        changes["email"] = _normalize_email(changes["email"])
    return UserOut.model_validate(repo.update(user_id, changes))


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    repo.delete(user_id)
    return Response(status_code=204)
