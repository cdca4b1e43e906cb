"""
Alembic環境設定

起動時のプログラム的実行（migration.run_migrations）と
alembic CLIの両方から読み込まれる。
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from creohub.core.config import get_settings
from creohub.infrastructure.database.models import Base, Creator, User, UserSession  # noqa: F401

config = context.config

# CLI実行時のみalembic.iniのロギング設定を適用
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """set_main_optionで渡されたURL、なければ設定から組み立てたURL"""
    return config.get_main_option("sqlalchemy.url") or get_settings().database_uri


def _configure_options(url: str) -> dict[str, object]:
    # SQLiteはALTER TABLEの制約が多いためバッチモードで実行する
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """DBに接続せずSQLスクリプトを出力する"""
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """DBに接続してマイグレーションを適用する"""
    url = get_url()
    connectable = config.attributes.get("connection", None)

    if connectable is None:
        configuration = config.get_section(config.config_ini_section) or {}
        configuration["sqlalchemy.url"] = url
        connectable = engine_from_config(
            configuration,
            prefix="sqlalchemy.",
            poolclass=pool.NullPool,
        )

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
