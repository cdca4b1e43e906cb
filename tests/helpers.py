"""テスト用ヘルパー関数"""

from datetime import datetime, timedelta
from typing import Any, Optional

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from creohub.infrastructure.database.models import Creator, User, UserSession
from creohub.infrastructure.security.passwords import hash_password

DEFAULT_PASSWORD = "correct-horse-battery"


def create_user(
    db: Session,
    username: str = "amina",
    email: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
    is_admin: bool = False,
) -> User:
    """
    テスト用ユーザーをDBへ直接作成する。

    Returns:
        作成したユーザー
    """
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        password_hash=hash_password(password),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_creator(
    db: Session,
    user: User,
    store_handle: str = "amina-art",
    plan_type: str = "free",
    subscription_status: str = "trial",
    trial_ends_at: Optional[datetime] = None,
    subscription_ends_at: Optional[datetime] = None,
    product_count: int = 0,
) -> Creator:
    """
    テスト用クリエイターをDBへ直接作成する。

    trial_ends_at を省略した場合は30日後に設定する。
    """
    creator = Creator(
        user_id=user.id,
        store_name=f"{user.username}'s store",
        store_handle=store_handle,
        plan_type=plan_type,
        subscription_status=subscription_status,
        trial_ends_at=trial_ends_at or datetime.now() + timedelta(days=30),
        subscription_ends_at=subscription_ends_at,
        product_count=product_count,
    )
    db.add(creator)
    db.commit()
    db.refresh(creator)
    return creator


def get_session_row(db: Session, token: str) -> UserSession:
    """トークンに対応するセッション行を最新状態で取得する。"""
    db.expire_all()
    row = db.query(UserSession).filter(UserSession.session_token == token).one()
    return row


def login(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> str:
    """
    ログインAPIを呼び出してセッショントークンを返す。
    """
    response = client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    token: str = response.json()["token"]
    return token


def auth_headers(token: str) -> dict[str, Any]:
    return {"Authorization": f"Bearer {token}"}
