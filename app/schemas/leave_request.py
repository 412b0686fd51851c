"""
Leave request schemas
"""
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.core.enums import Decision, LeaveType, RequestStatus
from app.schemas.common import fix_pg_timezone


class LeaveRequestBase(BaseModel):
    lr_type: LeaveType
    lr_start_date: date
    lr_end_date: date
    lr_reason: Optional[str] = None


class LeaveRequestCreate(LeaveRequestBase):
    pass


class LeaveRequestInDB(LeaveRequestBase):
    model_config = ConfigDict(from_attributes=True)

    lr_id: int
    lr_user_id: int
    lr_status: RequestStatus
    lr_admin_notes: Optional[str] = None
    lr_decided_by: Optional[int] = None
    lr_decided_at: Optional[datetime] = None
    lr_created_at: datetime
    lr_updated_at: Optional[datetime] = None

    @field_validator('lr_updated_at', 'lr_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_pg_timezone(v)


class LeaveRequest(LeaveRequestInDB):
    pass


class LeaveDecision(BaseModel):
    decision: Decision
    admin_notes: Optional[str] = None
