"""
WFH Log Model - Remote work claims awaiting admin validation
"""
from sqlalchemy import Column, BigInteger, String, Date, DateTime, Float, Text, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base

from app.db.types import BigIntegerPK


class WfhLog(Base):
    """WFH log model for hris schema - Table: hris.wfh_logs"""
    __tablename__ = "wfh_logs"
    __table_args__ = {"schema": "hris"}

    wl_id = Column(BigIntegerPK, primary_key=True, index=True, autoincrement=True)
    wl_user_id = Column(BigInteger, nullable=False, index=True)
    wl_leave_request_id = Column(BigInteger, ForeignKey("hris.leave_requests.lr_id"), nullable=True)
    wl_log_time = Column(DateTime, nullable=False)  # When the claim was made
    wl_log_date = Column(Date, nullable=False, index=True)  # The single day being claimed
    wl_activity_description = Column(Text, nullable=False)
    wl_evidence_ref = Column(String(500), nullable=False)  # Screenshot / document reference
    wl_lat = Column(Float, nullable=False)
    wl_lon = Column(Float, nullable=False)
    wl_status = Column(String(10), nullable=False, default="PENDING", index=True)
    wl_admin_notes = Column(Text, nullable=True)
    wl_validated_by = Column(BigInteger, nullable=True)  # Admin user id, NULL for system
    wl_validated_at = Column(DateTime, nullable=True)
    wl_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    wl_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
