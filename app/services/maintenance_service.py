"""
Maintenance Service - Entry points for periodic batch jobs

Operator endpoints, external cron callers and the in-process scheduler all
go through this class. Transient database errors are retried with linear
backoff; both jobs are idempotent so a retried run never duplicates work.
"""
import time
from datetime import datetime
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from atams.logging import get_logger

from app.core.config import settings
from app.schemas.maintenance import AutoCheckoutResult, ExpirySweepReport
from app.services.auto_checkout_service import AutoCheckoutService
from app.services.cleanup_service import CleanupService

logger = get_logger(__name__)

T = TypeVar("T")


class MaintenanceService:
    def __init__(
        self,
        cleanup_service: Optional[CleanupService] = None,
        auto_checkout_service: Optional[AutoCheckoutService] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        self.cleanup_service = cleanup_service or CleanupService()
        self.auto_checkout_service = auto_checkout_service or AutoCheckoutService()
        self.max_retries = max(1, max_retries if max_retries is not None else settings.BATCH_MAX_RETRIES)
        self.retry_delay = retry_delay if retry_delay is not None else settings.BATCH_RETRY_DELAY_SECONDS
        self._sleep = sleep

    def _run_with_retry(self, job_name: str, db: Session, job: Callable[[], T]) -> T:
        attempts = 0
        while True:
            try:
                return job()
            except OperationalError as e:
                attempts += 1
                db.rollback()
                logger.warning(
                    f"{job_name} failed (attempt {attempts}/{self.max_retries}): {str(e)}",
                    extra={'extra_data': {'job': job_name, 'attempt': attempts}}
                )
                if attempts >= self.max_retries:
                    logger.error(f"{job_name} gave up after {attempts} attempts")
                    raise
                self._sleep(self.retry_delay * attempts)

    def run_expiry_sweep(self, db: Session, now: Optional[datetime] = None) -> ExpirySweepReport:
        def job() -> ExpirySweepReport:
            stats_before = self.cleanup_service.get_wfh_pending_stats(db, now=now)
            results = self.cleanup_service.process_expired_wfh_requests(db, now=now)
            stats_after = self.cleanup_service.get_wfh_pending_stats(db, now=now)
            return ExpirySweepReport(results=results, stats_before=stats_before, stats_after=stats_after)

        return self._run_with_retry("expiry_sweep", db, job)

    def run_auto_checkout(self, db: Session, now: Optional[datetime] = None) -> AutoCheckoutResult:
        return self._run_with_retry("auto_checkout", db, lambda: self.auto_checkout_service.run(db, now=now))
