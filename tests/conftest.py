"""
pytest設定と共通フィクスチャ（SQLiteインメモリDBベース）
"""

import os
from typing import Any, Generator

# get_settings() はcreohubのインポート時に一度だけ評価されキャッシュされるため、
# creohubをインポートする前に環境変数を設定する
os.environ.update(
    {
        "ENV_MODE": "test",
        "DATABASE_URL": "sqlite://",
        "RUN_MIGRATIONS_ON_STARTUP": "false",
        "GEOLOCATION_ENABLED": "false",
        "SESSION_CLEANUP_SCHEDULE": "",
        "SENTRY_DSN": "",
    }
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from creohub.infrastructure.database import Base, get_db  # noqa: E402
from creohub.infrastructure.geolocation import GeolocationClient  # noqa: E402
from creohub.main import app  # noqa: E402
from creohub.presentation.api.deps import get_geolocation_client  # noqa: E402


@pytest.fixture(scope="function")
def test_engine() -> Generator[Engine, None, None]:
    """
    テスト用SQLAlchemy Engineを作成する。

    インメモリDBを全コネクションで共有するためStaticPoolを使用し、
    テストごとにテーブルを作り直す。

    Yields:
        SQLAlchemy Engine
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine: Engine) -> Generator[Session, None, None]:
    """
    テスト用DBセッション

    Args:
        test_engine: テスト用Engine

    Yields:
        SQLAlchemy Session
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture
def geolocation_country() -> dict[str, Any]:
    """
    ジオロケーションのスタブ結果（テストから書き換えて使う）

    Returns:
        {"country": 国コード or None} の辞書
    """
    return {"country": None}


@pytest.fixture(scope="function")
def client(
    db_session: Session, geolocation_country: dict[str, Any]
) -> Generator[TestClient, None, None]:
    """
    テスト用FastAPIクライアント

    Args:
        db_session: テスト用DBセッション
        geolocation_country: ジオロケーションのスタブ結果

    Yields:
        FastAPI TestClient
    """

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    class StubGeolocationClient(GeolocationClient):
        def lookup_country(self, ip_address: str | None) -> str | None:
            return geolocation_country["country"]

    def override_get_geolocation_client() -> GeolocationClient:
        return StubGeolocationClient(api_url="http://geo.invalid/{ip}")

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geolocation_client] = override_get_geolocation_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
