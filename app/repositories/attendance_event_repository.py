"""
Attendance Event Repository - Data access layer for the event audit trail
"""
from typing import List
from sqlalchemy.orm import Session

from app.models.attendance_event import AttendanceEvent
from app.repositories.base import TransactionalRepository


class AttendanceEventRepository(TransactionalRepository[AttendanceEvent]):
    def __init__(self):
        super().__init__(AttendanceEvent)

    def get_user_events(
        self,
        db: Session,
        user_id: int,
        event_type: str = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[AttendanceEvent]:
        """Get events addressed to a user, newest first"""
        query = db.query(AttendanceEvent).filter(AttendanceEvent.ae_user_id == user_id)

        if event_type:
            query = query.filter(AttendanceEvent.ae_event_type == event_type)

        return query.order_by(AttendanceEvent.ae_id.desc()).offset(skip).limit(limit).all()

    def count_by_type(self, db: Session, event_type: str) -> int:
        """Count events of one type using native SQL"""
        query = """
            SELECT COUNT(*)
            FROM hris.attendance_events
            WHERE ae_event_type = :event_type
        """
        return self.execute_raw_sql_scalar(db, query, {"event_type": event_type})
