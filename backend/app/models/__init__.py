from app.models.location import Location
from app.models.spot import Spot
from app.models.user import User

__all__ = ["Location", "Spot", "User"]
