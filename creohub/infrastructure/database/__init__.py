from .connection import get_db, engine, SessionLocal
from .models import Base, BaseModel, TimeStampMixin, User, UserSession, Creator

__all__ = [
    "get_db",
    "engine",
    "SessionLocal",
    "Base",
    "BaseModel",
    "TimeStampMixin",
    "User",
    "UserSession",
    "Creator",
]
