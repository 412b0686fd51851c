"""
Leave Service - Leave request submission and admin decisions
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
from atams.transaction import transaction

from app.core.clock import local_now
from app.core.enums import EventType, RequestStatus
from app.core.errors import ErrorCode, conflict_error, not_found_error, validation_error
from app.repositories.leave_request_repository import LeaveRequestRepository
from app.schemas.leave_request import LeaveDecision, LeaveRequest, LeaveRequestCreate
from app.services.notification_service import EventPublisher


class LeaveService:
    def __init__(self, publisher: Optional[EventPublisher] = None) -> None:
        self.repo = LeaveRequestRepository()
        self.publisher = publisher or EventPublisher()

    def submit(
        self,
        db: Session,
        user_id: int,
        payload: LeaveRequestCreate,
        now: Optional[datetime] = None
    ) -> LeaveRequest:
        if payload.lr_end_date < payload.lr_start_date:
            raise validation_error(
                ErrorCode.INVALID_RANGE,
                "End date must not be before start date",
                start_date=payload.lr_start_date.isoformat(),
                end_date=payload.lr_end_date.isoformat()
            )

        now = now or local_now()
        with transaction(db):
            obj = self.repo.add(db, {
                "lr_user_id": user_id,
                "lr_type": payload.lr_type.value,
                "lr_start_date": payload.lr_start_date,
                "lr_end_date": payload.lr_end_date,
                "lr_reason": payload.lr_reason,
                "lr_status": RequestStatus.PENDING.value
            })
            event = self.publisher.record(
                db,
                EventType.LEAVE_REQUEST_CREATED,
                user_id=user_id,
                reference_id=obj.lr_id,
                payload={
                    "type": payload.lr_type.value,
                    "start_date": payload.lr_start_date.isoformat(),
                    "end_date": payload.lr_end_date.isoformat()
                },
                occurred_at=now
            )

        self.publisher.dispatch([event])
        return LeaveRequest.model_validate(obj)

    def decide(
        self,
        db: Session,
        leave_id: int,
        decided_by: int,
        payload: LeaveDecision,
        now: Optional[datetime] = None
    ) -> LeaveRequest:
        """Approve or reject a PENDING leave request; attendance rows are left untouched"""
        now = now or local_now()

        with transaction(db):
            obj = self.repo.get_for_update(db, leave_id)
            if obj is None:
                raise not_found_error("Leave request not found", lr_id=leave_id)
            if obj.lr_status != RequestStatus.PENDING.value:
                raise conflict_error(
                    ErrorCode.ALREADY_DECIDED,
                    f"Leave request has already been {obj.lr_status.lower()}",
                    lr_status=obj.lr_status
                )

            new_status = payload.decision.resulting_status
            self.repo.stage_update(db, obj, {
                "lr_status": new_status.value,
                "lr_admin_notes": payload.admin_notes,
                "lr_decided_by": decided_by,
                "lr_decided_at": now
            })
            event = self.publisher.record(
                db,
                EventType.LEAVE_STATUS_CHANGED,
                user_id=obj.lr_user_id,
                reference_id=obj.lr_id,
                payload={"status": new_status.value, "admin_notes": payload.admin_notes},
                occurred_at=now
            )

        self.publisher.dispatch([event])
        return LeaveRequest.model_validate(obj)

    def list_user_leaves(
        self,
        db: Session,
        user_id: int,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[LeaveRequest]:
        rows = self.repo.get_with_filters(db, user_id=user_id, status=status, skip=skip, limit=limit)
        return [LeaveRequest.model_validate(r) for r in rows]

    def list_leaves(
        self,
        db: Session,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[LeaveRequest]:
        rows = self.repo.get_with_filters(db, user_id=user_id, status=status, skip=skip, limit=limit)
        return [LeaveRequest.model_validate(r) for r in rows]

    def count_leaves(self, db: Session, user_id: Optional[int] = None, status: Optional[str] = None) -> int:
        return self.repo.count_with_filters(db, user_id=user_id, status=status)
