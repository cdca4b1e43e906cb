"""
バッチ処理（APSchedulerによる定期実行）

タスクは tasks パッケージのインポート時にレジストリへ登録される。
"""

from .base import BatchTask
from .registry import TaskInfo, TaskRegistry, task_registry
from .scheduler import create_scheduler, start_scheduler, stop_scheduler

__all__ = [
    "BatchTask",
    "TaskInfo",
    "TaskRegistry",
    "task_registry",
    "create_scheduler",
    "start_scheduler",
    "stop_scheduler",
]
