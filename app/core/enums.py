"""
Closed status vocabularies shared by models, schemas and services
"""
from enum import Enum


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    LATE = "LATE"
    WFH = "WFH"
    LEAVE = "LEAVE"
    ABSENT = "ABSENT"


class RequestStatus(str, Enum):
    """Lifecycle of WFH logs and leave requests"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    SICK = "SICK"
    LEAVE = "LEAVE"
    WFH = "WFH"


class Decision(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def resulting_status(self) -> RequestStatus:
        if self is Decision.APPROVE:
            return RequestStatus.APPROVED
        return RequestStatus.REJECTED


class StatusSource(str, Enum):
    """Which signal a resolved day status was taken from"""
    ATTENDANCE = "ATTENDANCE"
    LEAVE = "LEAVE"
    REMOTE_WORK = "REMOTE_WORK"
    DEFAULT = "DEFAULT"
    NONE = "NONE"


class EventType(str, Enum):
    ATTENDANCE_CHECKED_IN = "attendance_checked_in"
    ATTENDANCE_CHECKED_OUT = "attendance_checked_out"
    ATTENDANCE_AUTO_CHECKED_OUT = "attendance_auto_checked_out"
    WFH_LOG_SUBMITTED = "wfh_log_submitted"
    WFH_LOG_VALIDATED = "wfh_log_validated"
    WFH_LOG_EXPIRED = "wfh_log_expired"
    LEAVE_REQUEST_CREATED = "leave_request_created"
    LEAVE_STATUS_CHANGED = "leave_status_changed"
