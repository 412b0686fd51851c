"""
Office Location Model - Geofenced check-in locations
"""
from sqlalchemy import Column, String, DateTime, Float, Integer, Boolean
from sqlalchemy.sql import func
from atams.db import Base


class OfficeLocation(Base):
    """Office location model for hris schema - Table: hris.office_locations"""
    __tablename__ = "office_locations"
    __table_args__ = {"schema": "hris"}

    ol_id = Column(String(50), primary_key=True, index=True)
    ol_name = Column(String(255), nullable=False)
    ol_lat = Column(Float, nullable=False)  # Geofence center latitude
    ol_lon = Column(Float, nullable=False)  # Geofence center longitude
    ol_radius_m = Column(Integer, nullable=False)
    ol_geofence_enabled = Column(Boolean, nullable=False, default=True)
    ol_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ol_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
