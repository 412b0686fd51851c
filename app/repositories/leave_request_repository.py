"""
Leave Request Repository - Data access layer for leave requests
"""
from typing import Optional, List
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from app.core.enums import RequestStatus
from app.models.leave_request import LeaveRequest
from app.repositories.base import TransactionalRepository


class LeaveRequestRepository(TransactionalRepository[LeaveRequest]):
    def __init__(self):
        super().__init__(LeaveRequest)

    def get_for_update(self, db: Session, leave_id: int) -> Optional[LeaveRequest]:
        return db.query(LeaveRequest).filter(LeaveRequest.lr_id == leave_id).with_for_update().first()

    def find_approved_covering(self, db: Session, user_id: int, target_date: date) -> Optional[LeaveRequest]:
        """Approved leave whose [start, end] range contains the day"""
        return db.query(LeaveRequest).filter(
            and_(
                LeaveRequest.lr_user_id == user_id,
                LeaveRequest.lr_status == RequestStatus.APPROVED.value,
                LeaveRequest.lr_start_date <= target_date,
                LeaveRequest.lr_end_date >= target_date
            )
        ).order_by(LeaveRequest.lr_decided_at.desc()).first()

    def get_with_filters(
        self,
        db: Session,
        user_id: int = None,
        status: str = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[LeaveRequest]:
        query = db.query(LeaveRequest)

        if user_id:
            query = query.filter(LeaveRequest.lr_user_id == user_id)
        if status:
            query = query.filter(LeaveRequest.lr_status == status)

        return query.order_by(LeaveRequest.lr_id.desc()).offset(skip).limit(limit).all()

    def count_with_filters(self, db: Session, user_id: int = None, status: str = None) -> int:
        query = db.query(func.count(LeaveRequest.lr_id))

        if user_id:
            query = query.filter(LeaveRequest.lr_user_id == user_id)
        if status:
            query = query.filter(LeaveRequest.lr_status == status)

        return query.scalar()
