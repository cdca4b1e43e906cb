"""
セッション管理サービス

RDBベースのログインセッション管理を提供
- ベアラートークンの発行
- スライディング方式の有効期限延長を伴う検証（条件付きUPDATE 1文で原子的に実行）
- ログアウト/全端末ログアウトによる失効
- 期限切れセッションの定期失効
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, cast

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from ..database.models.user import User
from ..database.models.user_session import UserSession
from ..security.tokens import generate_session_token, is_well_formed_token
from ...core.config import Settings, get_settings
from ...domain.exceptions.base import StorageUnavailableError

logger = logging.getLogger(__name__)


class SessionService:
    """
    セッション管理サービス
    """

    def __init__(self, db: DBSession, settings: Optional[Settings] = None):
        """
        Args:
            db: DBセッション
            settings: アプリケーション設定（Noneの場合はデフォルト取得）
        """
        self.db = db
        # 依存性注入: テスト時は任意の設定を渡せる
        self.settings = settings if settings is not None else get_settings()

    @property
    def timeout(self) -> timedelta:
        """セッションの有効期間"""
        return timedelta(seconds=self.settings.SESSION_TIMEOUT_SECONDS)

    def _storage_failure(self, action: str, error: SQLAlchemyError) -> StorageUnavailableError:
        logger.error(f"Failed to {action}: {error}", exc_info=True)
        self.db.rollback()
        return StorageUnavailableError(f"Failed to {action}")

    def create_session(
        self,
        user_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> str:
        """
        新しいセッションを作成

        Args:
            user_id: ユーザーID
            ip_address: クライアントIPアドレス
            user_agent: User-Agentヘッダー

        Returns:
            セッショントークン

        Raises:
            StorageUnavailableError: DBへの書き込みに失敗した場合
        """
        session_token = generate_session_token()
        now = datetime.now()

        session = UserSession(
            user_id=user_id,
            session_token=session_token,
            ip_address=ip_address,
            user_agent=user_agent,
            is_active=True,
            expires_at=now + self.timeout,
            last_used_at=now,
        )

        try:
            self.db.add(session)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("create session", e) from e

        logger.info(f"Session created for user {user_id}")
        return session_token

    def validate_session(self, session_token: Optional[str]) -> Optional[int]:
        """
        セッションを検証し、有効期限を延長する

        有効性の確認と期限延長を1つの条件付きUPDATEで行うため、
        同時に実行された失効処理を上書きしない。

        Args:
            session_token: セッショントークン

        Returns:
            ユーザーID、存在しない・失効済み・期限切れの場合はNone

        Raises:
            StorageUnavailableError: DBアクセスに失敗した場合
        """
        if not is_well_formed_token(session_token):
            logger.debug("Rejected malformed session token")
            return None

        now = datetime.now()
        try:
            result = self.db.execute(
                update(UserSession)
                .where(
                    UserSession.session_token == session_token,
                    UserSession.is_active.is_(True),
                    UserSession.expires_at > now,
                )
                .values(expires_at=now + self.timeout, last_used_at=now)
                .execution_options(synchronize_session=False)
            )
            rowcount = cast(int, getattr(result, "rowcount", 0))
            if rowcount == 0:
                self.db.rollback()
                logger.debug("Session token is invalid, revoked or expired")
                return None

            user_id = self.db.scalar(
                select(UserSession.user_id).where(
                    UserSession.session_token == session_token
                )
            )
            self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(last_active_at=now)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("validate session", e) from e

        return user_id

    def get_active_session(self, session_token: Optional[str]) -> Optional[UserSession]:
        """
        有効なセッションを取得（有効期限は延長しない）

        Args:
            session_token: セッショントークン

        Returns:
            セッション、無効な場合はNone
        """
        if not is_well_formed_token(session_token):
            return None

        try:
            return self.db.scalar(
                select(UserSession).where(
                    UserSession.session_token == session_token,
                    UserSession.is_active.is_(True),
                    UserSession.expires_at > datetime.now(),
                )
            )
        except SQLAlchemyError as e:
            raise self._storage_failure("load session", e) from e

    def list_active_sessions(self, user_id: int) -> list[UserSession]:
        """
        ユーザーの有効なセッション一覧を取得

        Args:
            user_id: ユーザーID

        Returns:
            最終利用日時の新しい順のセッション一覧
        """
        try:
            return list(
                self.db.scalars(
                    select(UserSession)
                    .where(
                        UserSession.user_id == user_id,
                        UserSession.is_active.is_(True),
                        UserSession.expires_at > datetime.now(),
                    )
                    .order_by(UserSession.last_used_at.desc())
                )
            )
        except SQLAlchemyError as e:
            raise self._storage_failure("list sessions", e) from e

    def invalidate_session(self, session_token: str) -> None:
        """
        セッションを失効させる

        失効済み・存在しないトークンに対してもエラーにしない。

        Args:
            session_token: セッショントークン
        """
        try:
            result = self.db.execute(
                update(UserSession)
                .where(UserSession.session_token == session_token)
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("invalidate session", e) from e

        if cast(int, getattr(result, "rowcount", 0)) > 0:
            logger.info("Session invalidated")

    def invalidate_all_sessions(self, user_id: int) -> int:
        """
        ユーザーの全セッションを失効させる（パスワード変更・全端末ログアウト）

        Args:
            user_id: ユーザーID

        Returns:
            失効させたセッション数
        """
        try:
            result = self.db.execute(
                update(UserSession)
                .where(
                    UserSession.user_id == user_id,
                    UserSession.is_active.is_(True),
                )
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("invalidate user sessions", e) from e

        count = cast(int, getattr(result, "rowcount", 0))
        logger.info(f"Invalidated {count} sessions for user {user_id}")
        return count

    def cleanup_expired(self) -> int:
        """
        期限切れのまま有効フラグが残っているセッションを失効させる

        Returns:
            失効させたセッション数
        """
        try:
            result = self.db.execute(
                update(UserSession)
                .where(
                    UserSession.is_active.is_(True),
                    UserSession.expires_at < datetime.now(),
                )
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_failure("cleanup expired sessions", e) from e

        count = cast(int, getattr(result, "rowcount", 0))
        if count > 0:
            logger.info(f"Cleaned up {count} expired sessions")
        return count
