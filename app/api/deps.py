"""
API Dependencies
Provides authentication and authorization dependencies using ATAMS factory pattern,
plus the service instances shared by the routers
"""
import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from atams.sso import create_atlas_client, create_auth_dependencies

from app.core.config import settings
from app.services.attendance_service import AttendanceService
from app.services.auto_checkout_service import AutoCheckoutService
from app.services.cleanup_service import CleanupService
from app.services.holiday_service import HolidayCalendar
from app.services.leave_service import LeaveService
from app.services.maintenance_service import MaintenanceService
from app.services.notification_service import EventPublisher
from app.services.office_location_service import OfficeLocationCache, OfficeLocationService
from app.services.remote_work_service import RemoteWorkService
from app.services.status_resolver import AttendanceStatusResolver

ADMIN_ROLE_LEVEL = 50

# Initialize Atlas SSO client using factory
atlas_client = create_atlas_client(settings)

# Create auth dependencies using factory
get_current_user, require_auth, require_min_role_level, require_role_level = create_auth_dependencies(atlas_client)

# Shared services
office_cache = OfficeLocationCache(ttl_seconds=settings.OFFICE_CACHE_TTL_SECONDS)
office_location_service = OfficeLocationService(cache=office_cache)
event_publisher = EventPublisher()
holiday_calendar = HolidayCalendar(settings.HOLIDAYS_FILE)
cleanup_service = CleanupService(publisher=event_publisher)
attendance_service = AttendanceService(
    office_service=office_location_service,
    holidays=holiday_calendar,
    publisher=event_publisher,
    cleanup_service=cleanup_service
)
status_resolver = AttendanceStatusResolver()
remote_work_service = RemoteWorkService(publisher=event_publisher)
leave_service = LeaveService(publisher=event_publisher)
maintenance_service = MaintenanceService(
    cleanup_service=cleanup_service,
    auto_checkout_service=AutoCheckoutService(publisher=event_publisher)
)


def is_admin(current_user: Optional[dict]) -> bool:
    return bool(current_user) and current_user.get("role_level", 0) >= ADMIN_ROLE_LEVEL


async def require_operator(
    x_cron_key: Optional[str] = Header(None, alias="X-Cron-Key"),
    current_user: Optional[dict] = Depends(get_current_user)
) -> Optional[dict]:
    """
    Allow maintenance triggers from an admin user or an external cron caller

    An external scheduler authenticates with the X-Cron-Key header matching
    CRON_API_KEY. An empty CRON_API_KEY disables key access.
    """
    if x_cron_key and settings.CRON_API_KEY and hmac.compare_digest(x_cron_key, settings.CRON_API_KEY):
        return None

    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not is_admin(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permission. Required minimum role level: {ADMIN_ROLE_LEVEL}"
        )
    return current_user


# Export for use in endpoints
__all__ = [
    "atlas_client",
    "get_current_user",
    "require_auth",
    "require_min_role_level",
    "require_role_level",
    "require_operator",
    "is_admin",
    "attendance_service",
    "status_resolver",
    "remote_work_service",
    "leave_service",
    "office_location_service",
    "maintenance_service",
]
