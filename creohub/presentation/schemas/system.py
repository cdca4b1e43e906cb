"""システム関連のスキーマ定義"""

from datetime import datetime
from typing import Literal, Optional

from .base import BaseSchema


class DatabaseStatus(BaseSchema):
    """
    データベース接続状況

    Attributes:
        status: DB接続の状態（healthy/unhealthy）
        connection: DB接続が確立されているか
        error: エラーメッセージ（エラー時のみ）
    """

    status: Literal["healthy", "unhealthy"]
    connection: bool
    error: Optional[str] = None


class SchedulerStatus(BaseSchema):
    """
    バッチスケジューラーの状況

    Attributes:
        running: スケジューラーが起動しているか
        jobs: 登録済みジョブID
    """

    running: bool
    jobs: list[str] = []


class HealthCheckResponse(BaseSchema):
    """
    ヘルスチェックレスポンス

    Attributes:
        status: 全体的なヘルス状態（ok/unhealthy）
        timestamp: レスポンス生成時刻
        uptime_seconds: アプリケーション起動からの経過秒数
        database: データベース接続状況
        scheduler: 期限切れセッション失効などのバッチスケジューラー状況
        environment: 実行環境（production/local/test）
    """

    status: Literal["ok", "unhealthy"]
    timestamp: datetime
    uptime_seconds: float
    database: DatabaseStatus
    scheduler: SchedulerStatus
    environment: str
