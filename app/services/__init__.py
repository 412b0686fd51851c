from .office_location_service import OfficeLocationService, OfficeLocationCache
from .holiday_service import HolidayCalendar
from .notification_service import EventPublisher, NotificationSink, LoggingNotificationSink
from .status_resolver import AttendanceStatusResolver
from .cleanup_service import CleanupService
from .attendance_service import AttendanceService
from .remote_work_service import RemoteWorkService
from .leave_service import LeaveService
from .auto_checkout_service import AutoCheckoutService
from .maintenance_service import MaintenanceService

__all__ = [
    "OfficeLocationService",
    "OfficeLocationCache",
    "HolidayCalendar",
    "EventPublisher",
    "NotificationSink",
    "LoggingNotificationSink",
    "AttendanceStatusResolver",
    "CleanupService",
    "AttendanceService",
    "RemoteWorkService",
    "LeaveService",
    "AutoCheckoutService",
    "MaintenanceService"
]
