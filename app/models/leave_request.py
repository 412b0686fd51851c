"""
Leave Request Model - Multi-day absence requests
"""
from sqlalchemy import Column, BigInteger, String, Date, DateTime, Text
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import BigIntegerPK


class LeaveRequest(Base):
    """Leave request model for hris schema - Table: hris.leave_requests"""
    __tablename__ = "leave_requests"
    __table_args__ = {"schema": "hris"}

    lr_id = Column(BigIntegerPK, primary_key=True, index=True, autoincrement=True)
    lr_user_id = Column(BigInteger, nullable=False, index=True)
    lr_type = Column(String(10), nullable=False)  # 'SICK', 'LEAVE' or 'WFH'
    lr_start_date = Column(Date, nullable=False)
    lr_end_date = Column(Date, nullable=False)
    lr_reason = Column(Text, nullable=True)
    lr_status = Column(String(10), nullable=False, default="PENDING", index=True)
    lr_admin_notes = Column(Text, nullable=True)
    lr_decided_by = Column(BigInteger, nullable=True)
    lr_decided_at = Column(DateTime, nullable=True)
    lr_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    lr_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
