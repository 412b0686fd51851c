"""
Office Location Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import settings
from app.schemas.common import fix_pg_timezone


class OfficeLocationBase(BaseModel):
    ol_name: str
    ol_lat: float
    ol_lon: float
    ol_radius_m: int = Field(default=settings.DEFAULT_GEOFENCE_RADIUS_M, gt=0, le=5000)
    ol_geofence_enabled: bool = True


class OfficeLocationCreate(OfficeLocationBase):
    ol_id: str = Field(min_length=1, max_length=50)


class OfficeLocationUpdate(BaseModel):
    ol_name: Optional[str] = None
    ol_lat: Optional[float] = None
    ol_lon: Optional[float] = None
    ol_radius_m: Optional[int] = Field(default=None, gt=0, le=5000)
    ol_geofence_enabled: Optional[bool] = None


class OfficeLocationInDB(OfficeLocationBase):
    model_config = ConfigDict(from_attributes=True)

    ol_id: str
    ol_created_at: datetime
    ol_updated_at: Optional[datetime] = None

    @field_validator('ol_updated_at', 'ol_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return fix_pg_timezone(v)


class OfficeLocation(OfficeLocationInDB):
    pass
