"""ユーザーリポジトリ"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from ..database.models.user import User
from ..security.passwords import hash_password, verify_password
from ...domain.exceptions.base import ConflictError, StorageUnavailableError

logger = logging.getLogger(__name__)


class UserRepository:
    """
    ユーザーの取得・作成・認証
    """

    def __init__(self, db: DBSession):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.username == username))

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.email == email.lower()))

    def create(
        self,
        *,
        username: str,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        is_creator: bool = False,
    ) -> User:
        """
        ユーザーを作成

        Raises:
            ConflictError: ユーザー名またはメールアドレスが既に使われている場合
            StorageUnavailableError: DBへの書き込みに失敗した場合
        """
        email = email.lower()
        existing = self.db.scalar(
            select(User).where(or_(User.username == username, User.email == email))
        )
        if existing:
            raise ConflictError("User already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            is_creator=is_creator,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user: {e}", exc_info=True)
            self.db.rollback()
            raise StorageUnavailableError("Failed to create user") from e

        self.db.refresh(user)
        logger.info(f"User created: {user.id}")
        return user

    def authenticate(
        self,
        *,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[User]:
        """
        ユーザー名またはメールアドレスとパスワードで認証

        Returns:
            認証に成功したユーザー、失敗した場合はNone
        """
        user: Optional[User] = None
        if username:
            user = self.get_by_username(username)
        elif email:
            user = self.get_by_email(email)

        if user is None or not verify_password(password, user.password_hash):
            return None
        return user
