"""
Remote work (WFH) log schemas
"""
from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enums import Decision, RequestStatus
from app.schemas.common import fix_pg_timezone


class WfhLogBase(BaseModel):
    wl_user_id: int
    wl_leave_request_id: Optional[int] = None
    wl_log_time: datetime
    wl_log_date: date
    wl_activity_description: str
    wl_evidence_ref: str
    wl_lat: float
    wl_lon: float
    wl_status: RequestStatus = RequestStatus.PENDING
    wl_admin_notes: Optional[str] = None
    wl_validated_by: Optional[int] = None
    wl_validated_at: Optional[datetime] = None


class WfhLogInDB(WfhLogBase):
    model_config = ConfigDict(from_attributes=True)

    wl_id: int
    wl_created_at: datetime
    wl_updated_at: Optional[datetime] = None

    @field_validator('wl_updated_at', 'wl_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_pg_timezone(v)


class WfhLog(WfhLogInDB):
    pass


class WfhLogCreate(BaseModel):
    """Employee WFH submission; defaults to claiming today"""
    wl_activity_description: str = Field(min_length=3)
    wl_evidence_ref: str = Field(min_length=1, max_length=500)
    wl_lat: float
    wl_lon: float
    wl_log_date: Optional[date] = None
    wl_leave_request_id: Optional[int] = None


class WfhLogValidate(BaseModel):
    decision: Decision
    admin_notes: Optional[str] = None


class WfhCleanupResult(BaseModel):
    """Outcome of one expiry sweep run"""
    processed_count: int = 0
    absent_records_created: int = 0
    errors: List[str] = Field(default_factory=list)


class WfhPendingStats(BaseModel):
    pending_count: int
    expired_pending_count: int
    recent_count: int
    total_expired_requests: int
