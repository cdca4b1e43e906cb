"""
データベースマイグレーション

アプリケーション起動時にAlembicマイグレーションをheadまで適用する。
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from creohub.core.config import Settings, get_settings
from creohub.core.logging import get_logger

SCRIPT_LOCATION = (Path(__file__).parent / "alembic").resolve()

# (ロガー名, 開発環境のレベル, それ以外のレベル)
_MIGRATION_LOGGERS = (
    ("alembic", logging.DEBUG, logging.INFO),
    ("sqlalchemy.engine", logging.INFO, logging.WARNING),
)


def _configure_migration_logging(settings: Settings) -> None:
    """
    Alembic/SQLAlchemyのログをuvicornのハンドラーへ流す。

    開発環境ではマイグレーションで発行されるSQL文も出力する。
    """
    handlers = logging.getLogger("uvicorn").handlers

    for name, dev_level, default_level in _MIGRATION_LOGGERS:
        target = logging.getLogger(name)
        for handler in handlers:
            if handler not in target.handlers:
                target.addHandler(handler)
        target.setLevel(dev_level if settings.is_development else default_level)


def create_alembic_config(database_uri: str) -> Config:
    """
    alembic.iniを使わずにAlembic設定を組み立てる。

    Args:
        database_uri: 対象データベースのURL

    Returns:
        Config: Alembic設定オブジェクト
    """
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    # ConfigParserの補間を避けるため%をエスケープする
    alembic_cfg.set_main_option("sqlalchemy.url", database_uri.replace("%", "%%"))
    return alembic_cfg


def run_migrations(logger_key: str | None = None) -> None:
    """
    マイグレーションをheadまで適用する

    失敗した場合はセッションを扱えない状態で起動しないよう例外を送出する。

    Args:
        logger_key: 使用するロガー名（Noneの場合はモジュール名）

    Raises:
        RuntimeError: マイグレーション実行に失敗した場合
    """
    logger = get_logger(logger_key or __name__)
    settings = get_settings()
    safe_url = make_url(settings.database_uri).render_as_string(hide_password=True)

    try:
        _configure_migration_logging(settings)
        alembic_cfg = create_alembic_config(settings.database_uri)

        logger.info(f"Applying database migrations to {safe_url}")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Database migration failed: {e}", exc_info=True)
        raise RuntimeError(f"Database migration failed: {e}") from e
