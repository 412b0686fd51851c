"""
Attendance Event Model - Audit trail for all emitted attendance events
"""
from sqlalchemy import Column, BigInteger, String, DateTime, JSON
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import BigIntegerPK


class AttendanceEvent(Base):
    """Attendance Event model for hris schema - Table: hris.attendance_events"""
    __tablename__ = "attendance_events"
    __table_args__ = {"schema": "hris"}

    ae_id = Column(BigIntegerPK, primary_key=True, index=True, autoincrement=True)
    ae_user_id = Column(BigInteger, nullable=False, index=True)  # Event recipient
    ae_event_type = Column(String(50), nullable=False, index=True)
    ae_reference_id = Column(BigInteger, nullable=True)  # Attendance / WFH log / leave id
    ae_payload = Column(JSON, nullable=True)
    ae_occurred_at = Column(DateTime, nullable=False)
    ae_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ae_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
