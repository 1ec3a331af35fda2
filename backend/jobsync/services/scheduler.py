from __future__ import annotations
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from jobsync.core.config import settings
from jobsync.services import job_store
from jobsync.services.sync_service import RunSummary, run_sync

logger = logging.getLogger(__name__)

JOB_ID = "job-sync"


class SyncScheduler:
    """Runs ``run_sync`` on a fixed interval, one run at a time.

    All triggers (interval ticks, the startup staleness check and manual
    calls) go through ``trigger_run``. A trigger that arrives while a run is
    in progress is dropped.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        interval: timedelta | None = None,
        sync_fn: Callable[[Session], RunSummary] = run_sync,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.session_factory = session_factory
        self.interval = interval or timedelta(minutes=settings.sync_interval_minutes)
        self.sync_fn = sync_fn
        self.clock = clock
        self.last_run_at: datetime | None = None
        self.last_summary: RunSummary | None = None
        self._run_lock = threading.Lock()
        self._scheduler: BackgroundScheduler | None = None

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    @property
    def is_started(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def trigger_run(self) -> RunSummary | None:
        if not self._run_lock.acquire(blocking=False):
            logger.info("sync already in progress, trigger ignored")
            return None
        try:
            db = self.session_factory()
            try:
                summary = self.sync_fn(db)
            finally:
                db.close()
            self.last_run_at = self.clock()
            self.last_summary = summary
            return summary
        finally:
            self._run_lock.release()

    def is_stale(self) -> bool:
        db = self.session_factory()
        try:
            latest = job_store.latest_created_at(db)
        finally:
            db.close()
        if latest is None:
            logger.info("no postings stored yet")
            return True
        age = self.clock() - latest
        if age > self.interval:
            logger.info("newest posting is %dh old", age.total_seconds() // 3600)
            return True
        logger.info("postings are fresh (%d minutes old)", age.total_seconds() // 60)
        return False

    def run_if_stale(self) -> RunSummary | None:
        if not self.is_stale():
            return None
        return self.trigger_run()

    def start(self) -> None:
        if self.is_started:
            return
        job_kwargs = {}
        try:
            if self.is_stale():
                job_kwargs["next_run_time"] = datetime.now(timezone.utc)
        except Exception:  # noqa: BLE001
            logger.exception("startup staleness check failed, waiting for the first interval")

        self._scheduler = BackgroundScheduler(timezone=timezone.utc)
        self._scheduler.add_job(
            self._scheduled_run,
            "interval",
            seconds=self.interval.total_seconds(),
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            **job_kwargs,
        )
        self._scheduler.start()
        logger.info("sync scheduled every %d minutes", self.interval.total_seconds() // 60)

    def stop(self, wait: bool = True) -> None:
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
        self._scheduler = None

    def _scheduled_run(self) -> None:
        try:
            self.trigger_run()
        except Exception:  # noqa: BLE001
            logger.exception("scheduled sync failed")
