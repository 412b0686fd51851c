"""
Auto Checkout Service - Force-close attendance rows left open past the cutoff
"""
from datetime import datetime, time
from typing import Optional

from sqlalchemy.orm import Session
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.clock import local_now
from app.core.config import settings
from app.core.enums import EventType
from app.repositories.attendance_repository import AttendanceRepository
from app.schemas.maintenance import AutoCheckoutResult
from app.services.notification_service import EventPublisher

logger = get_logger(__name__)


class AutoCheckoutService:
    def __init__(self, publisher: Optional[EventPublisher] = None, cutoff: Optional[time] = None) -> None:
        self.attendance_repo = AttendanceRepository()
        self.publisher = publisher or EventPublisher()
        self.cutoff = cutoff or settings.auto_checkout_time

    def run(self, db: Session, now: Optional[datetime] = None) -> AutoCheckoutResult:
        """
        Close today's open attendance rows at the cutoff time

        Before the cutoff this is a no-op. Rows already closed (by the user or
        an earlier run) are skipped, so repeated runs change nothing.
        """
        now = now or local_now()
        if now.time() < self.cutoff:
            return AutoCheckoutResult(message="Not time yet")

        today = now.date()
        cutoff_at = datetime.combine(today, self.cutoff)
        annotation = f"{settings.AUTO_CHECKOUT_REASON} {self.cutoff.strftime('%H:%M')}"
        result = AutoCheckoutResult(message="")

        open_ids = [row.at_id for row in self.attendance_repo.get_open_for_date(db, today)]
        db.commit()

        for attendance_id in open_ids:
            try:
                closed = self._close_row(db, attendance_id, cutoff_at, annotation, now)
            except Exception as e:
                result.errors.append(f"Attendance {attendance_id}: {str(e)}")
                logger.warning(
                    f"Auto check-out failed: {str(e)}",
                    extra={'extra_data': {'at_id': attendance_id}}
                )
                continue
            if closed:
                result.count += 1
                result.affected_ids.append(attendance_id)

        result.message = f"Auto checked-out {result.count} attendance record(s)"
        logger.info(
            "Auto check-out finished",
            extra={'extra_data': {
                'date': today.isoformat(),
                'count': result.count,
                'errors': len(result.errors)
            }}
        )
        return result

    def _close_row(self, db: Session, attendance_id: int, cutoff_at: datetime, annotation: str, now: datetime) -> bool:
        with transaction(db):
            row = self.attendance_repo.get_for_update(db, attendance_id)
            if row is None or row.at_checkin_at is None or row.at_checkout_at is not None:
                return False

            notes = f"{row.at_notes} ({annotation})" if row.at_notes else annotation
            checkout_at = max(cutoff_at, row.at_checkin_at)
            self.attendance_repo.stage_update(db, row, {
                "at_checkout_at": checkout_at,
                "at_notes": notes
            })
            event = self.publisher.record(
                db,
                EventType.ATTENDANCE_AUTO_CHECKED_OUT,
                user_id=row.at_user_id,
                reference_id=row.at_id,
                payload={"checkout_at": checkout_at.isoformat()},
                occurred_at=now
            )

        self.publisher.dispatch([event])
        return True
