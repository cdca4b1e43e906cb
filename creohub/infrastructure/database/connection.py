"""Engine・Sessionファクトリの構築とFastAPI用DBセッション依存関係"""

from typing import Any, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from creohub.core.config import get_settings
from creohub.core.logging import get_logger
from creohub.domain.exceptions.base import StorageUnavailableError

logger = get_logger(__name__)

POSTGRES_POOL_OPTIONS: dict[str, Any] = {
    "pool_size": 10,
    "max_overflow": 20,
    "pool_timeout": 30,
    "pool_recycle": 3600,
    "pool_pre_ping": True,
}


def engine_options(database_uri: str) -> dict[str, Any]:
    """SQLiteはプール設定を受け付けないのでスレッド共有だけ許可する"""
    if database_uri.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return dict(POSTGRES_POOL_OPTIONS)


def _build() -> tuple[Optional[Engine], Optional[sessionmaker[Session]]]:
    settings = get_settings()
    if not settings.has_database:
        logger.warning("Database is not configured; persistence is disabled")
        return None, None

    new_engine = create_engine(
        settings.database_uri, **engine_options(settings.database_uri)
    )
    return new_engine, sessionmaker(autocommit=False, autoflush=False, bind=new_engine)


engine, SessionLocal = _build()


def get_db() -> Generator[Session, None, None]:
    """
    リクエスト単位のDBセッション

    Raises:
        StorageUnavailableError: データベースが設定されていない場合（503）
    """
    if SessionLocal is None:
        raise StorageUnavailableError("Database is not configured")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
