from .base import Base, BaseModel, TimeStampMixin
from .user import User
from .user_session import UserSession
from .creator import Creator

__all__ = ["Base", "BaseModel", "TimeStampMixin", "User", "UserSession", "Creator"]
