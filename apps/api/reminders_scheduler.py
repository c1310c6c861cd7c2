from __future__ import annotations

import datetime as dt
import logging
import os
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from apps.api.observability import traced
from packages.core.dates.recurrence import local_today
from packages.core.reminders.engine import check_upcoming_dates
from packages.core.reminders.models import EmailTransport, RunSummary
from packages.core.storage.base import AppStore


logger = logging.getLogger("personalweb.reminders")

DEFAULT_CRON = "0 8 * * *"
JOB_ID = "date_reminders"
STARTUP_JOB_ID = "date_reminders_startup"


def _is_production() -> bool:
    return os.getenv("APP_ENV", "development").lower() == "production"


def _cron() -> str:
    return os.getenv("REMINDERS_CRON", DEFAULT_CRON)


def _timezone() -> Optional[str]:
    return os.getenv("REMINDERS_TIMEZONE") or None


class ReminderScheduler:
    """Owns the daily reminder job for the lifetime of the process."""

    def __init__(
        self,
        store: AppStore,
        transport: EmailTransport,
        cron: Optional[str] = None,
        timezone: Optional[str] = None,
        run_on_start: Optional[bool] = None,
    ) -> None:
        self._store = store
        self._transport = transport
        self._cron = cron or _cron()
        self._timezone = timezone if timezone is not None else _timezone()
        self._run_on_start = (
            run_on_start if run_on_start is not None else not _is_production()
        )
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def next_run_time(self) -> Optional[dt.datetime]:
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None

    def run_once(self, today: Optional[dt.date] = None) -> RunSummary:
        return check_upcoming_dates(
            self._store,
            self._transport,
            today or local_today(self._timezone),
        )

    def _run_job(self) -> None:
        try:
            with traced("reminders.run", cron=self._cron):
                self.run_once()
        except Exception as exc:
            logger.exception("reminders_run_failed error=%s", exc)

    def start(self) -> None:
        if self.running:
            return
        scheduler_kwargs = {"timezone": self._timezone} if self._timezone else {}
        trigger = CronTrigger.from_crontab(self._cron, **scheduler_kwargs)
        scheduler = BackgroundScheduler(**scheduler_kwargs)
        scheduler.add_job(
            self._run_job,
            trigger,
            id=JOB_ID,
            replace_existing=True,
        )
        if self._run_on_start:
            logger.info("reminders_startup_run queued")
            scheduler.add_job(
                self._run_job,
                "date",
                id=STARTUP_JOB_ID,
                replace_existing=True,
            )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("reminders_scheduled cron=%s timezone=%s", self._cron, self._timezone)

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("reminders_scheduler_stopped")
