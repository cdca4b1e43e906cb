"""Infrastructure layer - Technical implementations"""

from .database import get_db, engine, SessionLocal
from .geolocation import GeolocationClient
from .repositories import CreatorRepository, SessionService, UserRepository

__all__ = [
    "get_db",
    "engine",
    "SessionLocal",
    "GeolocationClient",
    "CreatorRepository",
    "SessionService",
    "UserRepository",
]
