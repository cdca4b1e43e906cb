from fastapi import APIRouter, Depends, Request, status

from ....core.config import Settings, get_settings
from ....core.logging import get_logger
from ....domain.exceptions.base import UnauthorizedError
from ....infrastructure.database.models import User
from ....infrastructure.repositories import SessionService, UserRepository
from ...schemas.auth import (
    ActiveSessionResponse,
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    RegisterRequest,
    SessionInfoResponse,
    UserResponse,
)
from ...schemas.base import MessageResponse
from ..deps import (
    get_current_user,
    get_current_user_id,
    get_session_service,
    get_session_token,
    get_user_repository,
)

router = APIRouter()
logger = get_logger(__name__)


def _login_response(
    request: Request, user: User, service: SessionService, settings: Settings
) -> LoginResponse:
    token = service.create_session(
        user.id,
        ip_address=getattr(request.state, "client_ip", None),
        user_agent=getattr(request.state, "user_agent", None),
    )
    return LoginResponse(
        token=token,
        expires_in=settings.SESSION_TIMEOUT_SECONDS,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED
)
def register(
    request: Request,
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    service: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """
    ユーザー登録

    登録と同時にログインし、セッショントークンを返す
    """
    user = users.create(
        username=body.username,
        email=body.email,
        password=body.password,
        full_name=body.full_name,
        is_creator=body.is_creator,
    )
    return _login_response(request, user, service, settings)


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    service: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """
    ログイン

    ユーザー名またはメールアドレスとパスワードで認証する
    """
    user = users.authenticate(
        password=body.password, username=body.username, email=body.email
    )
    if user is None:
        logger.info("Login failed")
        raise UnauthorizedError("Invalid credentials")

    logger.info(f"User {user.id} logged in")
    return _login_response(request, user, service, settings)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str | None = Depends(get_session_token),
    service: SessionService = Depends(get_session_service),
) -> MessageResponse:
    """
    ログアウト

    トークンが無効・未指定でも成功として扱う
    """
    if token:
        service.invalidate_session(token)
    return MessageResponse(message="Logged out")


@router.post("/logout-all", response_model=LogoutAllResponse)
def logout_all(
    user_id: int = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
) -> LogoutAllResponse:
    """
    全端末からログアウト
    """
    revoked = service.invalidate_all_sessions(user_id)
    return LogoutAllResponse(message="Logged out from all sessions", revoked=revoked)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)) -> UserResponse:
    """
    ログイン中のユーザー情報
    """
    return UserResponse.model_validate(user)


@router.get("/session", response_model=SessionInfoResponse)
def session_info(
    token: str | None = Depends(get_session_token),
    _user_id: int = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings),
) -> SessionInfoResponse:
    """
    現在のセッションの有効期限

    アクセス自体がセッションを延長するため、延長後の期限を返す
    """
    session = service.get_active_session(token)
    if session is None:
        raise UnauthorizedError("Invalid or expired session")

    return SessionInfoResponse(
        expires_at=session.expires_at,
        last_used_at=session.last_used_at,
        timeout_seconds=settings.SESSION_TIMEOUT_SECONDS,
        warning_seconds=settings.SESSION_WARNING_SECONDS,
    )


@router.get("/sessions", response_model=list[ActiveSessionResponse])
def list_sessions(
    token: str | None = Depends(get_session_token),
    user_id: int = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
) -> list[ActiveSessionResponse]:
    """
    ログイン中のユーザーの有効なセッション一覧
    """
    return [
        ActiveSessionResponse(
            id=s.id,
            ip_address=s.ip_address,
            user_agent=s.user_agent,
            expires_at=s.expires_at,
            last_used_at=s.last_used_at,
            created_at=s.created_at,
            current=s.session_token == token,
        )
        for s in service.list_active_sessions(user_id)
    ]
