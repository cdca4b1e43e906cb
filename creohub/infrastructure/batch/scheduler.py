"""APSchedulerの生成・起動・停止"""

from apscheduler.schedulers.background import BackgroundScheduler

from creohub.core.logging import get_logger

from .registry import task_registry

logger = get_logger(__name__)

# 同じタスクを並行実行しない。停止中に溜まった実行は1回にまとめる
JOB_DEFAULTS = {"coalesce": True, "max_instances": 1}


def create_scheduler() -> BackgroundScheduler:
    """レジストリ内の全タスクをジョブとして持つ未起動のスケジューラーを返す"""
    scheduler = BackgroundScheduler(job_defaults=dict(JOB_DEFAULTS))

    for task_id, info in task_registry.get_all().items():
        scheduler.add_job(
            info.func,
            trigger=info.trigger,
            id=task_id,
            name=info.description or task_id,
            replace_existing=True,
        )
        logger.info(f"[SCHEDULER] Job added: {task_id} ({info.trigger})")

    return scheduler


def start_scheduler(scheduler: BackgroundScheduler) -> None:
    scheduler.start()
    jobs = scheduler.get_jobs()
    logger.info(f"[SCHEDULER] Started with {len(jobs)} job(s)")
    for job in jobs:
        logger.info(f"[SCHEDULER] {job.id} next run at {job.next_run_time}")


def stop_scheduler(scheduler: BackgroundScheduler) -> None:
    """
    スケジューラーを停止

    実行中のジョブの完了は待たない。未起動なら何もしない。
    """
    if not scheduler.running:
        return
    scheduler.shutdown(wait=False)
    logger.info("[SCHEDULER] Stopped")
