"""
Scheduler Service - In-process cron triggers for maintenance jobs

Disabled by default; deployments that call the maintenance endpoints from an
external cron leave SCHEDULER_ENABLED off.
"""
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session
from atams.logging import get_logger

from app.core.config import settings
from app.services.maintenance_service import MaintenanceService

logger = get_logger(__name__)


def run_in_session(session_factory: Callable[[], Session], job: Callable[[Session], object], job_name: str) -> None:
    db = session_factory()
    try:
        result = job(db)
        logger.info(f"Scheduled job {job_name} finished", extra={'extra_data': {'job': job_name, 'result': str(result)}})
    finally:
        db.close()


def create_scheduler(maintenance: MaintenanceService, session_factory: Callable[[], Session]) -> BackgroundScheduler:
    """Build (not start) a scheduler with the expiry sweep and auto-checkout jobs"""
    scheduler = BackgroundScheduler(
        timezone=settings.TIMEZONE,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 3600
        }
    )

    scheduler.add_job(
        run_in_session,
        CronTrigger.from_crontab(settings.EXPIRY_SWEEP_CRON, timezone=settings.TIMEZONE),
        args=[session_factory, maintenance.run_expiry_sweep, "expiry_sweep"],
        id="wfh_expiry_sweep",
        replace_existing=True
    )
    scheduler.add_job(
        run_in_session,
        CronTrigger.from_crontab(settings.AUTO_CHECKOUT_CRON, timezone=settings.TIMEZONE),
        args=[session_factory, maintenance.run_auto_checkout, "auto_checkout"],
        id="auto_checkout",
        replace_existing=True
    )

    return scheduler
