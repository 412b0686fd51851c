"""
Attendance Schemas for check-in/check-out and daily status
"""
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.core.enums import AttendanceStatus, StatusSource
from app.schemas.common import fix_pg_timezone
from app.schemas.remote_work import WfhLog


class AttendanceBase(BaseModel):
    at_user_id: int
    at_office_id: Optional[str] = None
    at_date: date
    at_checkin_at: Optional[datetime] = None
    at_checkout_at: Optional[datetime] = None
    at_checkin_lat: Optional[float] = None
    at_checkin_lon: Optional[float] = None
    at_last_lat: Optional[float] = None
    at_last_lon: Optional[float] = None
    at_status: AttendanceStatus
    at_notes: Optional[str] = None


class AttendanceInDB(AttendanceBase):
    model_config = ConfigDict(from_attributes=True)

    at_id: int
    at_created_at: datetime
    at_updated_at: Optional[datetime] = None

    @field_validator('at_updated_at', 'at_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_pg_timezone(v)


class Attendance(AttendanceInDB):
    pass


# Request/Response schemas for API endpoints
class CheckInRequest(BaseModel):
    """Request schema for check-in; ranges are validated by the geofence validator"""
    at_lat: Optional[float] = None
    at_lon: Optional[float] = None
    at_notes: Optional[str] = None
    office_id: Optional[str] = None


class CheckOutRequest(BaseModel):
    """Request schema for check-out"""
    at_lat: Optional[float] = None
    at_lon: Optional[float] = None


class CheckInResponse(BaseModel):
    attendance: Attendance
    distance_m: Optional[float] = None
    message: str


class CheckOutResponse(BaseModel):
    attendance: Attendance
    message: str


class DayStatus(BaseModel):
    """Reconciled status of one user on one day"""
    user_id: int
    day: date
    status: Optional[AttendanceStatus] = None
    source: StatusSource


class TodayStatusResponse(BaseModel):
    """Response schema for today's attendance status"""
    attendance: Optional[Attendance] = None
    wfh_log: Optional[WfhLog] = None
    has_attendance: bool
    has_wfh: bool
    day_status: DayStatus
