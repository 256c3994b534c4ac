from __future__ import annotations

from app.models.user import User
from app.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
    label = "User"
