from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from creohub.core.config import get_settings
from creohub.core.logging import get_logger
from creohub.infrastructure.database import connection
from creohub.presentation.schemas.system import (
    DatabaseStatus,
    HealthCheckResponse,
    SchedulerStatus,
)

router = APIRouter()
logger = get_logger(__name__)


def check_database() -> DatabaseStatus:
    """
    軽量なクエリでDB接続を確認する

    Returns:
        DB接続状況
    """
    if connection.SessionLocal is None:
        return DatabaseStatus(
            status="unhealthy", connection=False, error="Database not configured"
        )

    db = connection.SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return DatabaseStatus(status="unhealthy", connection=False, error=str(e))
    finally:
        db.close()

    return DatabaseStatus(status="healthy", connection=True)


def check_scheduler(request: Request) -> SchedulerStatus:
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        return SchedulerStatus(running=False)
    return SchedulerStatus(
        running=scheduler.running, jobs=[job.id for job in scheduler.get_jobs()]
    )


@router.get("/", response_model=HealthCheckResponse)
def healthcheck(request: Request, response: Response) -> HealthCheckResponse:
    """
    ヘルスチェックエンドポイント

    - DB接続状況
    - バッチスケジューラーの状況
    - アプリケーションuptime
    - 環境情報を返す

    DB接続に失敗した場合は503 Service Unavailableを返す
    """
    settings = get_settings()

    # uptime計算
    start_time = getattr(request.app.state, "start_time", None)
    uptime_seconds = 0.0
    if start_time:
        uptime_seconds = (datetime.now(timezone.utc) - start_time).total_seconds()

    db_status = check_database()
    overall_status = "ok" if db_status.status == "healthy" else "unhealthy"

    # セッション検証にはDBが必須のため、DB接続失敗時は503を返す
    if overall_status == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=uptime_seconds,
        database=db_status,
        scheduler=check_scheduler(request),
        environment=settings.normalized_env_mode,
    )
