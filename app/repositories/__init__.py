from .office_location_repository import OfficeLocationRepository
from .attendance_repository import AttendanceRepository
from .wfh_log_repository import WfhLogRepository
from .leave_request_repository import LeaveRequestRepository
from .attendance_event_repository import AttendanceEventRepository

__all__ = [
    "OfficeLocationRepository",
    "AttendanceRepository",
    "WfhLogRepository",
    "LeaveRequestRepository",
    "AttendanceEventRepository"
]
