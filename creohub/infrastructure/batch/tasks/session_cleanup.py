"""期限切れセッションの失効タスク"""

from creohub.core.config import get_settings
from creohub.infrastructure.batch.base import BatchTask
from creohub.infrastructure.batch.registry import task_registry
from creohub.infrastructure.database import connection
from creohub.infrastructure.repositories.session_repository import SessionService


class SessionCleanupTask(BatchTask):
    """
    期限切れセッションの失効タスク。

    is_active=True のまま有効期限を過ぎたセッションを失効させる。
    """

    def __init__(self) -> None:
        super().__init__()
        self.settings = get_settings()
        self.cleaned_up = 0

    def execute(self) -> None:
        if connection.SessionLocal is None:
            self.logger.info("Database not configured, skipping session cleanup")
            return

        db = connection.SessionLocal()
        try:
            self.cleaned_up = SessionService(db, self.settings).cleanup_expired()
        finally:
            db.close()

    def on_success(self) -> None:
        self.logger.info(f"[BATCH] Session cleanup revoked {self.cleaned_up} sessions")


def run_session_cleanup() -> None:
    """スケジューラーから呼び出されるエントリポイント"""
    SessionCleanupTask().run()


_schedule = get_settings().SESSION_CLEANUP_SCHEDULE
if _schedule:
    task_registry.register(
        task_id="session_cleanup",
        func=run_session_cleanup,
        cron=_schedule,
        description="Revoke expired user sessions",
    )
