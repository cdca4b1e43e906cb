"""アプリケーションライフサイクル管理"""

import contextlib
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI

from creohub.core.config import Settings, get_settings
from creohub.core.logging import get_logger

logger = get_logger(__name__)


def _migrate(settings: Settings) -> None:
    if not settings.has_database:
        logger.warning("Database is not configured; skipping migrations")
        return
    if not settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.info("Database migrations are disabled")
        return

    from creohub.infrastructure.database.migration import run_migrations

    run_migrations(logger_key="uvicorn")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    起動時にマイグレーションとセッション失効スケジューラーを準備し、
    終了時にスケジューラーを止める

    app.state には start_time（uptime算出用）と scheduler が入る。
    """
    app.state.start_time = datetime.now(timezone.utc)

    _migrate(get_settings())

    # インポート時にタスクがレジストリへ登録される
    from creohub.infrastructure.batch import tasks  # noqa: F401
    from creohub.infrastructure.batch.scheduler import (
        create_scheduler,
        start_scheduler,
        stop_scheduler,
    )

    scheduler = create_scheduler()
    app.state.scheduler = scheduler
    start_scheduler(scheduler)
    try:
        yield
    finally:
        stop_scheduler(scheduler)
