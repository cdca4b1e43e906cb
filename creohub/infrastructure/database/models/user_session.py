from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class UserSession(BaseModel):
    """
    ログインセッションモデル

    is_active=True かつ現在時刻 < expires_at の間のみ有効。
    行は物理削除せず、is_active=False で失効させる。

    Attributes:
        user_id: 所有ユーザーID
        session_token: ベアラートークン（一意、256bit乱数のHEX表現）
        ip_address: ログイン元IPアドレス
        user_agent: User-Agentヘッダー
        is_active: 有効フラグ
        expires_at: 有効期限（利用のたびに延長されるスライディング方式）
        last_used_at: 最終利用日時
    """

    __tablename__ = "user_sessions"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    session_token: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    last_used_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<UserSession(id={self.id}, user_id={self.user_id}, "
            f"is_active={self.is_active}, expires_at={self.expires_at})>"
        )
