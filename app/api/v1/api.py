from fastapi import APIRouter
from app.api.v1.endpoints import attendance, remote_work, leave_requests, office_locations, maintenance

api_router = APIRouter()

# Register routes
api_router.include_router(office_locations.router, prefix="/office-locations", tags=["Office Locations"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(remote_work.router, prefix="/wfh-logs", tags=["WFH Logs"])
api_router.include_router(leave_requests.router, prefix="/leave-requests", tags=["Leave Requests"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["Maintenance"])
