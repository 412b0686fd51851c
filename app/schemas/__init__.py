from .office_location import OfficeLocation, OfficeLocationCreate, OfficeLocationUpdate
from .attendance import (
    Attendance,
    CheckInRequest,
    CheckInResponse,
    CheckOutRequest,
    CheckOutResponse,
    DayStatus,
    TodayStatusResponse
)
from .remote_work import (
    WfhLog,
    WfhLogCreate,
    WfhLogValidate,
    WfhCleanupResult,
    WfhPendingStats
)
from .leave_request import LeaveRequest, LeaveRequestCreate, LeaveDecision
from .maintenance import AutoCheckoutResult, ExpirySweepReport
from .common import DataResponse, PaginationResponse

__all__ = [
    # Office location schemas
    "OfficeLocation",
    "OfficeLocationCreate",
    "OfficeLocationUpdate",
    # Attendance schemas
    "Attendance",
    "CheckInRequest",
    "CheckInResponse",
    "CheckOutRequest",
    "CheckOutResponse",
    "DayStatus",
    "TodayStatusResponse",
    # Remote work schemas
    "WfhLog",
    "WfhLogCreate",
    "WfhLogValidate",
    "WfhCleanupResult",
    "WfhPendingStats",
    # Leave schemas
    "LeaveRequest",
    "LeaveRequestCreate",
    "LeaveDecision",
    # Maintenance schemas
    "AutoCheckoutResult",
    "ExpirySweepReport",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
