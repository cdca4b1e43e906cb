"""定期実行タスクのレジストリ"""

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from apscheduler.triggers.cron import CronTrigger


@dataclass(frozen=True)
class TaskInfo:
    """登録済みタスク（cron文字列は登録時にCronTriggerへ変換済み）"""

    func: Callable[[], None]
    trigger: CronTrigger
    description: str = ""


class TaskRegistry:
    """
    タスクIDをキーにタスクを保持する

    タスクモジュールはインポート時に register() を呼び、
    create_scheduler() が起動時にまとめてジョブ化する。
    """

    def __init__(self) -> None:
        self._tasks: dict[str, TaskInfo] = {}

    def register(
        self, task_id: str, func: Callable[[], None], cron: str, description: str = ""
    ) -> TaskInfo:
        """
        タスクを登録（同じIDは上書き）

        Raises:
            ValueError: cron式が不正な場合
        """
        info = TaskInfo(func, CronTrigger.from_crontab(cron), description)
        self._tasks[task_id] = info
        return info

    def unregister(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)

    def get_all(self) -> Mapping[str, TaskInfo]:
        return MappingProxyType(self._tasks)


task_registry = TaskRegistry()
