"""
Remote Work Service - WFH log submission and admin validation
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from atams.logging import get_logger
from atams.transaction import transaction

from app.core.clock import local_now, start_of_day
from app.core.enums import AttendanceStatus, Decision, EventType, RequestStatus
from app.core.errors import ErrorCode, conflict_error, not_found_error, validation_error
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.leave_request_repository import LeaveRequestRepository
from app.repositories.wfh_log_repository import WfhLogRepository
from app.schemas.remote_work import WfhLog, WfhLogCreate, WfhLogValidate
from app.services.geofence import validate_coordinates
from app.services.notification_service import EventPublisher

logger = get_logger(__name__)

REJECTED_ABSENCE_NOTE = "Absent - WFH request rejected"


class RemoteWorkService:
    def __init__(self, publisher: Optional[EventPublisher] = None) -> None:
        self.wfh_repo = WfhLogRepository()
        self.attendance_repo = AttendanceRepository()
        self.leave_repo = LeaveRequestRepository()
        self.publisher = publisher or EventPublisher()

    def submit(
        self,
        db: Session,
        user_id: int,
        payload: WfhLogCreate,
        now: Optional[datetime] = None
    ) -> WfhLog:
        """
        Create a PENDING WFH log for a single day (today by default)

        A backdated log is stamped at the start of the claimed day so the
        approved attendance row never crosses days.

        Raises:
            BadRequestException: INVALID_COORDINATES, INVALID_INPUT, INVALID_RANGE
            ConflictException: ALREADY_CHECKED_IN, DUPLICATE_REMOTE_WORK
        """
        validate_coordinates(payload.wl_lat, payload.wl_lon)

        description = payload.wl_activity_description.strip()
        if len(description) < 3:
            raise validation_error(ErrorCode.INVALID_INPUT, "Activity description must be at least 3 characters")

        now = now or local_now()
        log_date = payload.wl_log_date or now.date()
        if log_date > now.date():
            raise validation_error(
                ErrorCode.INVALID_RANGE,
                "WFH logs cannot be submitted for a future day",
                log_date=log_date.isoformat()
            )

        if payload.wl_leave_request_id is not None:
            leave = self.leave_repo.get(db, payload.wl_leave_request_id)
            if (
                leave is None
                or leave.lr_user_id != user_id
                or not leave.lr_start_date <= log_date <= leave.lr_end_date
            ):
                raise validation_error(
                    ErrorCode.INVALID_RANGE,
                    "Linked leave request does not cover the claimed day",
                    leave_request_id=payload.wl_leave_request_id
                )

        if self.attendance_repo.exists_for_user_and_date(db, user_id, log_date):
            raise conflict_error(
                ErrorCode.ALREADY_CHECKED_IN,
                "Attendance already recorded for this day",
                log_date=log_date.isoformat()
            )

        existing = self.wfh_repo.get_active_for_user(db, user_id, log_date)
        if existing:
            raise conflict_error(
                ErrorCode.DUPLICATE_REMOTE_WORK,
                "A WFH log already exists for this day",
                wl_id=existing.wl_id,
                wl_status=existing.wl_status
            )

        log_time = now if log_date == now.date() else start_of_day(log_date)

        with transaction(db):
            db_log = self.wfh_repo.add(db, {
                "wl_user_id": user_id,
                "wl_leave_request_id": payload.wl_leave_request_id,
                "wl_log_time": log_time,
                "wl_log_date": log_date,
                "wl_activity_description": description,
                "wl_evidence_ref": payload.wl_evidence_ref,
                "wl_lat": payload.wl_lat,
                "wl_lon": payload.wl_lon,
                "wl_status": RequestStatus.PENDING.value
            })
            event = self.publisher.record(
                db,
                EventType.WFH_LOG_SUBMITTED,
                user_id=user_id,
                reference_id=db_log.wl_id,
                payload={"log_date": log_date.isoformat()},
                occurred_at=now
            )

        self.publisher.dispatch([event])
        return WfhLog.model_validate(db_log)

    def validate(
        self,
        db: Session,
        log_id: int,
        validator_id: int,
        payload: WfhLogValidate,
        now: Optional[datetime] = None
    ) -> WfhLog:
        """
        Approve or reject a PENDING WFH log

        APPROVE creates the WFH attendance row for the claimed day. REJECT of a
        past day creates an ABSENT row. Both fail with DUPLICATE_ATTENDANCE if
        the day already has an attendance row.

        Raises:
            NotFoundException: NOT_FOUND
            ConflictException: ALREADY_DECIDED, DUPLICATE_ATTENDANCE
        """
        now = now or local_now()
        decision = payload.decision

        try:
            with transaction(db):
                log = self.wfh_repo.get_for_update(db, log_id)
                if log is None:
                    raise not_found_error("WFH log not found", wl_id=log_id)
                if log.wl_status != RequestStatus.PENDING.value:
                    raise conflict_error(
                        ErrorCode.ALREADY_DECIDED,
                        f"WFH log has already been {log.wl_status.lower()}",
                        wl_status=log.wl_status
                    )
                if self.attendance_repo.exists_for_user_and_date(db, log.wl_user_id, log.wl_log_date):
                    raise conflict_error(
                        ErrorCode.DUPLICATE_ATTENDANCE,
                        "Attendance already exists for this day",
                        log_date=log.wl_log_date.isoformat()
                    )

                if decision is Decision.APPROVE:
                    self.attendance_repo.add(db, {
                        "at_user_id": log.wl_user_id,
                        "at_date": log.wl_log_date,
                        "at_checkin_at": log.wl_log_time,
                        "at_checkin_lat": log.wl_lat,
                        "at_checkin_lon": log.wl_lon,
                        "at_status": AttendanceStatus.WFH.value,
                        "at_notes": log.wl_activity_description
                    })
                elif log.wl_log_date < now.date():
                    self.attendance_repo.add(db, {
                        "at_user_id": log.wl_user_id,
                        "at_date": log.wl_log_date,
                        "at_status": AttendanceStatus.ABSENT.value,
                        "at_notes": REJECTED_ABSENCE_NOTE
                    })

                new_status = decision.resulting_status
                self.wfh_repo.stage_update(db, log, {
                    "wl_status": new_status.value,
                    "wl_admin_notes": payload.admin_notes,
                    "wl_validated_by": validator_id,
                    "wl_validated_at": now
                })
                event = self.publisher.record(
                    db,
                    EventType.WFH_LOG_VALIDATED,
                    user_id=log.wl_user_id,
                    reference_id=log.wl_id,
                    payload={
                        "status": new_status.value,
                        "log_date": log.wl_log_date.isoformat(),
                        "admin_notes": payload.admin_notes
                    },
                    occurred_at=now
                )
        except IntegrityError:
            raise conflict_error(ErrorCode.DUPLICATE_ATTENDANCE, "Attendance already exists for this day")

        self.publisher.dispatch([event])
        logger.info(
            "WFH log validated",
            extra={'extra_data': {'wl_id': log_id, 'status': new_status.value, 'validator_id': validator_id}}
        )
        return WfhLog.model_validate(log)

    def list_user_logs(self, db: Session, user_id: int, skip: int = 0, limit: int = 50) -> List[WfhLog]:
        logs = self.wfh_repo.get_user_logs(db, user_id, skip, limit)
        return [WfhLog.model_validate(log) for log in logs]

    def list_pending(self, db: Session, skip: int = 0, limit: int = 100) -> List[WfhLog]:
        logs = self.wfh_repo.get_pending(db, skip, limit)
        return [WfhLog.model_validate(log) for log in logs]

    def count_pending(self, db: Session) -> int:
        return self.wfh_repo.count_by_status(db, RequestStatus.PENDING.value)
