"""定期実行タスクの基底クラス"""

import time
from abc import ABC, abstractmethod

import sentry_sdk

from creohub.core.logging import get_logger


class BatchTask(ABC):
    """
    スケジューラーから呼ばれるタスク

    サブクラスは execute() だけを実装すればよい。
    run() は所要時間のログと失敗時のSentry送信を行い、例外は再送出する。
    """

    def __init__(self) -> None:
        self.logger = get_logger(type(self).__module__)

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def execute(self) -> None: ...

    def on_success(self) -> None:
        pass

    def on_failure(self, error: Exception) -> None:
        self.logger.error(f"[BATCH] {self.name} failed: {error}", exc_info=error)

    def run(self) -> None:
        started = time.monotonic()
        self.logger.info(f"[BATCH] {self.name} started")
        try:
            self.execute()
        except Exception as e:
            self.on_failure(e)
            sentry_sdk.capture_exception(e)
            raise

        self.on_success()
        self.logger.info(
            f"[BATCH] {self.name} finished in {time.monotonic() - started:.2f}s"
        )
