"""
Attendance Service - Main business logic for check-in and check-out
"""
from typing import List, Optional
from datetime import datetime, date
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.clock import local_now
from app.core.config import settings
from app.core.enums import AttendanceStatus, EventType
from app.core.errors import ErrorCode, conflict_error, policy_error
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.wfh_log_repository import WfhLogRepository
from app.schemas.attendance import (
    Attendance,
    CheckInRequest,
    CheckInResponse,
    CheckOutRequest,
    CheckOutResponse
)
from app.services.cleanup_service import CleanupService
from app.services.geofence import check_geofence, validate_coordinates
from app.services.holiday_service import HolidayCalendar
from app.services.notification_service import EventPublisher
from app.services.office_location_service import OfficeLocationService
from app.services.status_resolver import classify_check_in

logger = get_logger(__name__)


def build_check_in_notes(user_notes: Optional[str], status: AttendanceStatus, distance_m: Optional[float]) -> str:
    parts = []
    if user_notes and user_notes.strip():
        parts.append(user_notes.strip())
    if status is AttendanceStatus.LATE:
        parts.append(f"[{settings.LATE_NOTE_MARKER}]")
    if distance_m is not None:
        parts.append(f"distance={round(distance_m)}m")
    return " ".join(parts)


class AttendanceService:
    def __init__(
        self,
        office_service: Optional[OfficeLocationService] = None,
        holidays: Optional[HolidayCalendar] = None,
        publisher: Optional[EventPublisher] = None,
        cleanup_service: Optional[CleanupService] = None
    ) -> None:
        self.attendance_repo = AttendanceRepository()
        self.wfh_repo = WfhLogRepository()
        self.office_service = office_service or OfficeLocationService()
        self.holidays = holidays or HolidayCalendar(settings.HOLIDAYS_FILE)
        self.publisher = publisher or EventPublisher()
        self.cleanup_service = cleanup_service or CleanupService(self.publisher)

    def _validate_location(self, db: Session, office_id: str, user_lat: float, user_lon: float) -> Optional[float]:
        """
        Validate user location against the office geofence

        Returns:
            Measured distance in meters, or None when the check is skipped

        Raises:
            ForbiddenException: NO_OFFICE_CONFIGURED or OUT_OF_GEOFENCE
        """
        office = self.office_service.get_geofence(db, office_id)
        if office is None:
            raise policy_error(
                ErrorCode.NO_OFFICE_CONFIGURED,
                "Office location is not configured",
                office_id=office_id
            )

        if not settings.GEOFENCE_ENFORCED or not office.geofence_enabled:
            return None

        result = check_geofence(user_lat, user_lon, office.lat, office.lon, office.radius_m)
        if not result.within_radius:
            raise policy_error(
                ErrorCode.OUT_OF_GEOFENCE,
                f"Out of geofence (distance: {result.distance_m:.0f}m, allowed: {office.radius_m}m)",
                distance_m=round(result.distance_m, 1),
                radius_m=office.radius_m
            )
        return result.distance_m

    def check_in(
        self,
        db: Session,
        user_id: int,
        request: CheckInRequest,
        now: Optional[datetime] = None
    ) -> CheckInResponse:
        """
        Record a physical check-in for today

        Args:
            db: Database session
            user_id: Current user ID from auth
            request: Coordinates, optional notes and office id
            now: Local wall-clock override

        Returns:
            CheckInResponse: Created attendance row and measured distance

        Raises:
            BadRequestException: INVALID_COORDINATES
            ConflictException: ALREADY_CHECKED_IN, CONFLICTING_REMOTE_WORK
            ForbiddenException: HOLIDAY, NO_OFFICE_CONFIGURED, OUT_OF_GEOFENCE
        """
        validate_coordinates(request.at_lat, request.at_lon)

        now = now or local_now()
        today = now.date()
        office_id = request.office_id or settings.DEFAULT_OFFICE_ID

        # 1. Resolve the user's own stale WFH claims first
        if settings.EXPIRE_WFH_ON_CHECK_IN:
            self.cleanup_service.process_expired_wfh_requests(db, user_id=user_id, now=now)

        # 2. One attendance row per user per day
        if self.attendance_repo.exists_for_user_and_date(db, user_id, today):
            raise conflict_error(ErrorCode.ALREADY_CHECKED_IN, "You have already checked in today")

        # 3. Remote work claim for today excludes physical presence
        active_log = self.wfh_repo.get_active_for_user(db, user_id, today)
        if active_log:
            raise conflict_error(
                ErrorCode.CONFLICTING_REMOTE_WORK,
                "Cannot check in: a WFH log already exists for today",
                wl_id=active_log.wl_id,
                wl_status=active_log.wl_status
            )

        # 4. Holiday policy
        holiday = self.holidays.is_holiday(today)
        if holiday.is_holiday:
            raise policy_error(ErrorCode.HOLIDAY, f"Today is a holiday: {holiday.name}", holiday=holiday.name)

        # 5. Geofence
        distance_m = self._validate_location(db, office_id, request.at_lat, request.at_lon)

        status = classify_check_in(now, settings.late_threshold)

        try:
            with transaction(db):
                db_attendance = self.attendance_repo.add(db, {
                    "at_user_id": user_id,
                    "at_office_id": office_id,
                    "at_date": today,
                    "at_checkin_at": now,
                    "at_checkin_lat": request.at_lat,
                    "at_checkin_lon": request.at_lon,
                    "at_last_lat": request.at_lat,
                    "at_last_lon": request.at_lon,
                    "at_status": status.value,
                    "at_notes": build_check_in_notes(request.at_notes, status, distance_m)
                })
                event = self.publisher.record(
                    db,
                    EventType.ATTENDANCE_CHECKED_IN,
                    user_id=user_id,
                    reference_id=db_attendance.at_id,
                    payload={"status": status.value, "office_id": office_id},
                    occurred_at=now
                )
        except IntegrityError:
            # Lost the race against a concurrent check-in for the same day
            raise conflict_error(ErrorCode.ALREADY_CHECKED_IN, "You have already checked in today")

        self.publisher.dispatch([event])
        logger.info(
            "User checked in",
            extra={'extra_data': {'user_id': user_id, 'status': status.value, 'office_id': office_id}}
        )

        return CheckInResponse(
            attendance=Attendance.model_validate(db_attendance),
            distance_m=round(distance_m, 1) if distance_m is not None else None,
            message=f"Hadir ✔ {now.strftime('%H:%M')}"
        )

    def check_out(
        self,
        db: Session,
        user_id: int,
        request: Optional[CheckOutRequest] = None,
        now: Optional[datetime] = None
    ) -> CheckOutResponse:
        """
        Close today's open attendance row

        Raises:
            BadRequestException: INVALID_COORDINATES (only when coordinates are sent)
            ConflictException: NOT_CHECKED_IN
        """
        request = request or CheckOutRequest()
        has_coords = request.at_lat is not None or request.at_lon is not None
        if has_coords:
            validate_coordinates(request.at_lat, request.at_lon)

        now = now or local_now()
        today = now.date()

        existing = self.attendance_repo.get_open_for_user(db, user_id, today)
        if existing is None:
            raise conflict_error(
                ErrorCode.NOT_CHECKED_IN,
                "No open check-in for today (not checked in or already checked out)"
            )

        update_data = {"at_checkout_at": now}
        if has_coords:
            update_data["at_last_lat"] = request.at_lat
            update_data["at_last_lon"] = request.at_lon

        with transaction(db):
            db_attendance = self.attendance_repo.stage_update(db, existing, update_data)
            event = self.publisher.record(
                db,
                EventType.ATTENDANCE_CHECKED_OUT,
                user_id=user_id,
                reference_id=db_attendance.at_id,
                payload={"checkout_at": now.isoformat()},
                occurred_at=now
            )

        self.publisher.dispatch([event])

        return CheckOutResponse(
            attendance=Attendance.model_validate(db_attendance),
            message=f"Pulang ✔ {now.strftime('%H:%M')}"
        )

    def get_user_history(
        self,
        db: Session,
        user_id: int,
        date_from: date = None,
        date_to: date = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Attendance]:
        """Get user's attendance history"""
        rows = self.attendance_repo.get_user_history(db, user_id, date_from, date_to, skip, limit)
        return [Attendance.model_validate(r) for r in rows]

    def get_attendance_admin(
        self,
        db: Session,
        user_id: int = None,
        office_id: str = None,
        date_from: date = None,
        date_to: date = None,
        status: str = None,
        skip: int = 0,
        limit: int = 100,
        sort: str = "desc"
    ) -> List[Attendance]:
        """Get attendance rows for admin (with filters)"""
        rows = self.attendance_repo.get_with_filters(
            db, user_id, office_id, date_from, date_to, status, skip, limit, sort
        )
        return [Attendance.model_validate(r) for r in rows]

    def count_attendance_admin(
        self,
        db: Session,
        user_id: int = None,
        office_id: str = None,
        date_from: date = None,
        date_to: date = None,
        status: str = None
    ) -> int:
        """Count attendance rows for admin (with filters)"""
        return self.attendance_repo.count_with_filters(
            db, user_id, office_id, date_from, date_to, status
        )
