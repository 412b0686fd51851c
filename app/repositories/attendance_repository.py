"""
Attendance Repository - Data access layer for daily attendance rows
"""
from typing import Optional, List
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from app.models.attendance import Attendance
from app.repositories.base import TransactionalRepository


class AttendanceRepository(TransactionalRepository[Attendance]):
    def __init__(self):
        super().__init__(Attendance)

    def get_by_user_and_date(self, db: Session, user_id: int, target_date: date) -> Optional[Attendance]:
        """Get the attendance row (any status) for user on a day using ORM"""
        return db.query(Attendance).filter(
            and_(
                Attendance.at_user_id == user_id,
                Attendance.at_date == target_date
            )
        ).first()

    def exists_for_user_and_date(self, db: Session, user_id: int, target_date: date) -> bool:
        return db.query(Attendance.at_id).filter(
            and_(
                Attendance.at_user_id == user_id,
                Attendance.at_date == target_date
            )
        ).first() is not None

    def get_for_update(self, db: Session, attendance_id: int) -> Optional[Attendance]:
        """Load a row with a row lock held until the transaction ends"""
        return db.query(Attendance).filter(Attendance.at_id == attendance_id).with_for_update().first()

    def get_open_for_user(self, db: Session, user_id: int, target_date: date) -> Optional[Attendance]:
        """Get checked-in but not checked-out row for user on a day using ORM"""
        return db.query(Attendance).filter(
            and_(
                Attendance.at_user_id == user_id,
                Attendance.at_date == target_date,
                Attendance.at_checkin_at.isnot(None),
                Attendance.at_checkout_at.is_(None)
            )
        ).first()

    def get_open_for_date(self, db: Session, target_date: date) -> List[Attendance]:
        """Get all open rows of a day, candidates for auto-checkout"""
        return db.query(Attendance).filter(
            and_(
                Attendance.at_date == target_date,
                Attendance.at_checkin_at.isnot(None),
                Attendance.at_checkout_at.is_(None)
            )
        ).order_by(Attendance.at_id.asc()).all()

    def get_user_history(
        self,
        db: Session,
        user_id: int,
        date_from: date = None,
        date_to: date = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Attendance]:
        """Get user's attendance rows, newest day first"""
        query = db.query(Attendance).filter(Attendance.at_user_id == user_id)

        if date_from:
            query = query.filter(Attendance.at_date >= date_from)
        if date_to:
            query = query.filter(Attendance.at_date <= date_to)

        return query.order_by(Attendance.at_date.desc()).offset(skip).limit(limit).all()

    def _filtered_query(
        self,
        db: Session,
        user_id: int = None,
        office_id: str = None,
        date_from: date = None,
        date_to: date = None,
        status: str = None
    ):
        query = db.query(Attendance)

        if user_id:
            query = query.filter(Attendance.at_user_id == user_id)
        if office_id:
            query = query.filter(Attendance.at_office_id == office_id)
        if date_from:
            query = query.filter(Attendance.at_date >= date_from)
        if date_to:
            query = query.filter(Attendance.at_date <= date_to)
        if status:
            query = query.filter(Attendance.at_status == status)

        return query

    def get_with_filters(
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
        """Get attendance rows with various filters using ORM"""
        query = self._filtered_query(db, user_id, office_id, date_from, date_to, status)

        # Sorting
        if sort.lower() == "asc":
            query = query.order_by(Attendance.at_date.asc(), Attendance.at_id.asc())
        else:
            query = query.order_by(Attendance.at_date.desc(), Attendance.at_id.desc())

        return query.offset(skip).limit(limit).all()

    def count_with_filters(
        self,
        db: Session,
        user_id: int = None,
        office_id: str = None,
        date_from: date = None,
        date_to: date = None,
        status: str = None
    ) -> int:
        """Count attendance rows with filters"""
        query = self._filtered_query(db, user_id, office_id, date_from, date_to, status)
        return query.with_entities(func.count(Attendance.at_id)).scalar()
