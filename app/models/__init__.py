from .office_location import OfficeLocation
from .attendance import Attendance
from .leave_request import LeaveRequest
from .wfh_log import WfhLog
from .attendance_event import AttendanceEvent

__all__ = [
    "OfficeLocation",
    "Attendance",
    "LeaveRequest",
    "WfhLog",
    "AttendanceEvent"
]
