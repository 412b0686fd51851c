"""
Attendance Model - One presence fact per user per calendar day
"""
from sqlalchemy import Column, BigInteger, String, Date, DateTime, Float, Text, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import BigIntegerPK


class Attendance(Base):
    """Attendance model for hris schema - Table: hris.attendance"""
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("at_user_id", "at_date", name="uq_attendance_user_date"),
        {"schema": "hris"},
    )

    at_id = Column(BigIntegerPK, primary_key=True, index=True, autoincrement=True)
    at_user_id = Column(BigInteger, nullable=False, index=True)  # Atlas SSO user id
    at_office_id = Column(String(50), ForeignKey("hris.office_locations.ol_id"), nullable=True, index=True)
    at_date = Column(Date, nullable=False, index=True)  # Local calendar day
    at_checkin_at = Column(DateTime, nullable=True)  # Local wall-clock time
    at_checkout_at = Column(DateTime, nullable=True)
    at_checkin_lat = Column(Float, nullable=True)
    at_checkin_lon = Column(Float, nullable=True)
    at_last_lat = Column(Float, nullable=True)  # Last known position (check-out)
    at_last_lon = Column(Float, nullable=True)
    at_status = Column(String(10), nullable=False)  # AttendanceStatus value
    at_notes = Column(Text, nullable=True)
    at_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    at_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
