"""認証関連のスキーマ定義"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from .base import BaseSchema


class RegisterRequest(BaseSchema):
    """ユーザー登録リクエスト"""

    username: str = Field(min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8, max_length=128)
    full_name: Optional[str] = Field(default=None, max_length=255)
    is_creator: bool = False


class LoginRequest(BaseSchema):
    """
    ログインリクエスト

    username または email のどちらかが必須
    """

    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def require_identifier(self) -> "LoginRequest":
        if not self.username and not self.email:
            raise ValueError("username or email is required")
        return self


class UserResponse(BaseSchema):
    """ユーザー情報（パスワードハッシュは含まない）"""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    is_creator: bool
    is_admin: bool
    last_active_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoginResponse(BaseSchema):
    """
    ログインレスポンス

    Attributes:
        token: セッショントークン（Authorization: Bearer で送信する）
        token_type: 常に"bearer"
        expires_in: 有効期間（秒）。利用のたびに延長される
        user: ログインユーザー
    """

    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class SessionInfoResponse(BaseSchema):
    """
    現在のセッション情報

    クライアントのアイドルタイマーは expires_at の warning_seconds 前に警告を出し、
    expires_at でログアウトする。
    """

    expires_at: datetime
    last_used_at: Optional[datetime] = None
    timeout_seconds: int
    warning_seconds: int


class ActiveSessionResponse(BaseSchema):
    """有効なセッション一覧の要素（トークンは含まない）"""

    id: int
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    expires_at: datetime
    last_used_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    current: bool = False


class LogoutAllResponse(BaseSchema):
    """全端末ログアウトレスポンス"""

    message: str
    revoked: int
