from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...core.config import Settings, get_settings
from ...domain.exceptions.base import UnauthorizedError
from ...infrastructure.database import get_db
from ...infrastructure.database.models import User
from ...infrastructure.geolocation import GeolocationClient
from ...infrastructure.repositories import (
    CreatorRepository,
    SessionService,
    UserRepository,
)
from ...utils.session_helper import get_bearer_token


def get_session_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    """
    セッション管理サービスを取得するdependency
    """
    return SessionService(db, settings)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_creator_repository(db: Session = Depends(get_db)) -> CreatorRepository:
    return CreatorRepository(db)


def get_geolocation_client(
    settings: Settings = Depends(get_settings),
) -> GeolocationClient:
    return GeolocationClient.from_settings(settings)


def get_session_token(request: Request) -> Optional[str]:
    """
    リクエストのセッショントークンを取得するdependency

    session_middlewareが格納した値を優先し、なければヘッダーから直接読む
    """
    token = getattr(request.state, "session_token", None)
    if token is None:
        token = get_bearer_token(request)
    return token


def get_current_user_id(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    service: SessionService = Depends(get_session_service),
) -> int:
    """
    認証済みユーザーIDを取得するdependency

    - Authorization: Bearer {session_token}

    検証に成功するとセッションの有効期限が延長される。
    """
    user_id = service.validate_session(token)
    if user_id is None:
        raise UnauthorizedError("Invalid or expired session")

    request.state.user_id = user_id
    return user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    認証済みユーザーを取得するdependency
    """
    user = users.get(user_id)
    if user is None:
        raise UnauthorizedError("Invalid or expired session")
    return user
