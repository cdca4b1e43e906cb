from .creator_repository import CreatorRepository
from .session_repository import SessionService
from .user_repository import UserRepository

__all__ = ["CreatorRepository", "SessionService", "UserRepository"]
