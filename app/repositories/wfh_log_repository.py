"""
WFH Log Repository - Data access layer for remote work claims
"""
from typing import Dict, Optional, List
from datetime import date, datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from app.core.enums import RequestStatus
from app.models.wfh_log import WfhLog
from app.repositories.base import TransactionalRepository

ACTIVE_STATUSES = (RequestStatus.PENDING.value, RequestStatus.APPROVED.value)


class WfhLogRepository(TransactionalRepository[WfhLog]):
    def __init__(self):
        super().__init__(WfhLog)

    def get_active_for_user(self, db: Session, user_id: int, target_date: date) -> Optional[WfhLog]:
        """PENDING or APPROVED log claiming the given day"""
        return db.query(WfhLog).filter(
            and_(
                WfhLog.wl_user_id == user_id,
                WfhLog.wl_log_date == target_date,
                WfhLog.wl_status.in_(ACTIVE_STATUSES)
            )
        ).order_by(WfhLog.wl_id.desc()).first()

    def get_approved_for_user(self, db: Session, user_id: int, target_date: date) -> Optional[WfhLog]:
        return db.query(WfhLog).filter(
            and_(
                WfhLog.wl_user_id == user_id,
                WfhLog.wl_log_date == target_date,
                WfhLog.wl_status == RequestStatus.APPROVED.value
            )
        ).first()

    def get_for_update(self, db: Session, log_id: int) -> Optional[WfhLog]:
        """Load a log with a row lock held until the transaction ends"""
        return db.query(WfhLog).filter(WfhLog.wl_id == log_id).with_for_update().first()

    def get_expired_pending(self, db: Session, before_date: date, user_id: int = None) -> List[WfhLog]:
        """Pending logs claiming a day strictly before ``before_date``"""
        query = db.query(WfhLog).filter(
            and_(
                WfhLog.wl_status == RequestStatus.PENDING.value,
                WfhLog.wl_log_date < before_date
            )
        )

        if user_id:
            query = query.filter(WfhLog.wl_user_id == user_id)

        return query.order_by(WfhLog.wl_log_date.asc(), WfhLog.wl_id.asc()).all()

    def get_user_logs(self, db: Session, user_id: int, skip: int = 0, limit: int = 50) -> List[WfhLog]:
        return db.query(WfhLog).filter(
            WfhLog.wl_user_id == user_id
        ).order_by(WfhLog.wl_log_time.desc()).offset(skip).limit(limit).all()

    def get_pending(self, db: Session, skip: int = 0, limit: int = 100) -> List[WfhLog]:
        return db.query(WfhLog).filter(
            WfhLog.wl_status == RequestStatus.PENDING.value
        ).order_by(WfhLog.wl_log_time.desc()).offset(skip).limit(limit).all()

    def count_by_status(self, db: Session, status: str) -> int:
        return db.query(func.count(WfhLog.wl_id)).filter(WfhLog.wl_status == status).scalar()

    def count_by_status_before(self, db: Session, before_date: date) -> Dict[str, int]:
        """Group logs claiming days before ``before_date`` by status"""
        rows = db.query(WfhLog.wl_status, func.count(WfhLog.wl_id)).filter(
            WfhLog.wl_log_date < before_date
        ).group_by(WfhLog.wl_status).all()
        return {status: count for status, count in rows}

    def count_submitted_since(self, db: Session, since: datetime) -> int:
        return db.query(func.count(WfhLog.wl_id)).filter(WfhLog.wl_log_time >= since).scalar()
