"""
Attendance Status Resolver - lateness classification and daily reconciliation
"""
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.orm import Session

from app.core.clock import local_now
from app.core.config import settings
from app.core.enums import AttendanceStatus, LeaveType, StatusSource
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.leave_request_repository import LeaveRequestRepository
from app.repositories.wfh_log_repository import WfhLogRepository
from app.schemas.attendance import Attendance, DayStatus, TodayStatusResponse
from app.schemas.remote_work import WfhLog

LEAVE_TYPE_STATUS = {
    LeaveType.SICK: AttendanceStatus.LEAVE,
    LeaveType.LEAVE: AttendanceStatus.LEAVE,
    LeaveType.WFH: AttendanceStatus.WFH,
}


def classify_check_in(check_in_at: datetime, late_threshold: Optional[time] = None) -> AttendanceStatus:
    """PRESENT up to and including the threshold instant, LATE after it"""
    threshold = late_threshold or settings.late_threshold
    if check_in_at.time() <= threshold:
        return AttendanceStatus.PRESENT
    return AttendanceStatus.LATE


class AttendanceStatusResolver:
    def __init__(self) -> None:
        self.attendance_repo = AttendanceRepository()
        self.leave_repo = LeaveRequestRepository()
        self.wfh_repo = WfhLogRepository()

    def resolve_day_status(
        self,
        db: Session,
        user_id: int,
        day: date,
        today: Optional[date] = None
    ) -> DayStatus:
        """
        Compute the authoritative status of a user on a day

        Precedence: attendance row > approved leave covering the day >
        approved WFH log > ABSENT for past days. Today and future days
        without any signal resolve to ``None``.
        """
        if today is None:
            today = local_now().date()

        attendance = self.attendance_repo.get_by_user_and_date(db, user_id, day)
        if attendance:
            return DayStatus(
                user_id=user_id,
                day=day,
                status=AttendanceStatus(attendance.at_status),
                source=StatusSource.ATTENDANCE
            )

        leave = self.leave_repo.find_approved_covering(db, user_id, day)
        if leave:
            return DayStatus(
                user_id=user_id,
                day=day,
                status=LEAVE_TYPE_STATUS[LeaveType(leave.lr_type)],
                source=StatusSource.LEAVE
            )

        if self.wfh_repo.get_approved_for_user(db, user_id, day):
            return DayStatus(
                user_id=user_id,
                day=day,
                status=AttendanceStatus.WFH,
                source=StatusSource.REMOTE_WORK
            )

        if day < today:
            return DayStatus(user_id=user_id, day=day, status=AttendanceStatus.ABSENT, source=StatusSource.DEFAULT)

        return DayStatus(user_id=user_id, day=day, status=None, source=StatusSource.NONE)

    def get_today_status(self, db: Session, user_id: int, now: Optional[datetime] = None) -> TodayStatusResponse:
        """Get user's attendance row, active WFH log and resolved status for today"""
        today = (now or local_now()).date()

        attendance = self.attendance_repo.get_by_user_and_date(db, user_id, today)
        wfh_log = self.wfh_repo.get_active_for_user(db, user_id, today)

        return TodayStatusResponse(
            attendance=Attendance.model_validate(attendance) if attendance else None,
            wfh_log=WfhLog.model_validate(wfh_log) if wfh_log else None,
            has_attendance=attendance is not None,
            has_wfh=wfh_log is not None,
            day_status=self.resolve_day_status(db, user_id, today, today=today)
        )
