"""
Cleanup Service - Expiry sweep for stale pending WFH logs

A PENDING log whose claimed day has passed without an admin decision is
auto-rejected. When the user has no attendance row for that day an ABSENT
row is created so the day is accounted for.
"""
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.clock import local_now, start_of_day
from app.core.enums import AttendanceStatus, EventType, RequestStatus
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.wfh_log_repository import WfhLogRepository
from app.schemas.remote_work import WfhCleanupResult, WfhPendingStats
from app.services.notification_service import EventPublisher

logger = get_logger(__name__)

EXPIRED_ABSENCE_NOTE = "Absent - WFH request expired (not processed within the day)"


def expired_admin_note(log_date: date) -> str:
    return (
        "Auto-rejected: Request expired (not processed within the day). "
        f"Original request date: {log_date.isoformat()}"
    )


class CleanupService:
    def __init__(self, publisher: Optional[EventPublisher] = None) -> None:
        self.attendance_repo = AttendanceRepository()
        self.wfh_repo = WfhLogRepository()
        self.publisher = publisher or EventPublisher()

    def process_expired_wfh_requests(
        self,
        db: Session,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> WfhCleanupResult:
        """
        Resolve every PENDING log claiming a day before today

        Args:
            db: Database session
            user_id: Restrict the sweep to one user (check-in path)
            now: Local wall-clock override

        Returns:
            WfhCleanupResult: processed / absent counts and per-item errors
        """
        now = now or local_now()
        today = now.date()
        result = WfhCleanupResult()

        log_ids = [log.wl_id for log in self.wfh_repo.get_expired_pending(db, today, user_id)]
        # Release the read snapshot before per-item transactions
        db.commit()

        for log_id in log_ids:
            try:
                absent_created = self._expire_log(db, log_id, today, now)
            except Exception as e:
                result.errors.append(f"WFH log {log_id}: {str(e)}")
                logger.warning(
                    f"Failed to expire WFH log: {str(e)}",
                    extra={'extra_data': {'wl_id': log_id}}
                )
                continue

            if absent_created is None:
                continue
            result.processed_count += 1
            if absent_created:
                result.absent_records_created += 1

        if log_ids:
            logger.info(
                "WFH expiry sweep finished",
                extra={'extra_data': {
                    'user_id': user_id,
                    'candidates': len(log_ids),
                    'processed': result.processed_count,
                    'absent_created': result.absent_records_created,
                    'errors': len(result.errors)
                }}
            )
        return result

    def _expire_log(self, db: Session, log_id: int, today: date, now: datetime) -> Optional[bool]:
        """One log, one transaction. Returns None when another run already resolved it."""
        with transaction(db):
            log = self.wfh_repo.get_for_update(db, log_id)
            if log is None or log.wl_status != RequestStatus.PENDING.value or log.wl_log_date >= today:
                return None

            absent_created = False
            if not self.attendance_repo.exists_for_user_and_date(db, log.wl_user_id, log.wl_log_date):
                self.attendance_repo.add(db, {
                    "at_user_id": log.wl_user_id,
                    "at_date": log.wl_log_date,
                    "at_status": AttendanceStatus.ABSENT.value,
                    "at_notes": EXPIRED_ABSENCE_NOTE
                })
                absent_created = True

            self.wfh_repo.stage_update(db, log, {
                "wl_status": RequestStatus.REJECTED.value,
                "wl_admin_notes": expired_admin_note(log.wl_log_date),
                "wl_validated_by": None,
                "wl_validated_at": now
            })

            event = self.publisher.record(
                db,
                EventType.WFH_LOG_EXPIRED,
                user_id=log.wl_user_id,
                reference_id=log.wl_id,
                payload={
                    "log_date": log.wl_log_date.isoformat(),
                    "absent_created": absent_created
                },
                occurred_at=now
            )

        self.publisher.dispatch([event])
        return absent_created

    def get_wfh_pending_stats(
        self,
        db: Session,
        now: Optional[datetime] = None,
        recent_days: int = 7
    ) -> WfhPendingStats:
        """Read-only counters for the WFH management dashboard"""
        now = now or local_now()
        today = now.date()

        before_today = self.wfh_repo.count_by_status_before(db, today)

        return WfhPendingStats(
            pending_count=self.wfh_repo.count_by_status(db, RequestStatus.PENDING.value),
            expired_pending_count=before_today.get(RequestStatus.PENDING.value, 0),
            recent_count=self.wfh_repo.count_submitted_since(db, start_of_day(today - timedelta(days=recent_days))),
            total_expired_requests=sum(before_today.values())
        )
