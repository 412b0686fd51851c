"""
Attendance Endpoints - Check-in, check-out, daily status and history
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from app.db.session import get_db
from app.schemas import (
    Attendance,
    CheckInRequest,
    CheckInResponse,
    CheckOutRequest,
    CheckOutResponse,
    DayStatus,
    TodayStatusResponse,
    DataResponse,
    PaginationResponse
)
from app.api.deps import (
    require_auth,
    require_min_role_level,
    is_admin,
    attendance_service,
    status_resolver
)
from app.core.config import settings
from app.core.enums import AttendanceStatus
from atams.encryption import encrypt_response_data
from atams.exceptions import ForbiddenException

router = APIRouter()


@router.post(
    "/check-in",
    response_model=DataResponse[CheckInResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_in(
    request: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Physical check-in for today

    **Authorization:**
    - Requires role level >= 1

    **Process:**
    1. Validate coordinates
    2. Expire the user's stale pending WFH logs
    3. Reject duplicate check-in or conflicting WFH log for today
    4. Reject holidays
    5. Geofence validation against the office location
    6. Classify PRESENT / LATE and record the row

    **Errors:**
    - 400: INVALID_COORDINATES
    - 403: HOLIDAY, OUT_OF_GEOFENCE, NO_OFFICE_CONFIGURED
    - 409: ALREADY_CHECKED_IN, CONFLICTING_REMOTE_WORK
    """
    result = attendance_service.check_in(db, current_user["user_id"], request)

    return DataResponse(
        success=True,
        message="Check-in recorded successfully",
        data=result
    )


@router.post(
    "/check-out",
    response_model=DataResponse[CheckOutResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_out(
    request: Optional[CheckOutRequest] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Close today's attendance

    **Authorization:**
    - Requires role level >= 1

    **Errors:**
    - 409: NOT_CHECKED_IN (no check-in today or already checked out)
    """
    result = attendance_service.check_out(db, current_user["user_id"], request)

    return DataResponse(
        success=True,
        message="Check-out recorded successfully",
        data=result
    )


@router.get(
    "/me/today",
    response_model=DataResponse[TodayStatusResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_today(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's attendance and WFH log for today

    **Authorization:**
    - Requires role level >= 1
    """
    today_status = status_resolver.get_today_status(db, current_user["user_id"])

    response = DataResponse(
        success=True,
        message="Today's status retrieved successfully",
        data=today_status
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/day-status",
    response_model=DataResponse[DayStatus],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_day_status(
    day: date = Query(..., description="Day in YYYY-MM-DD format"),
    user_id: Optional[int] = Query(None, description="Target user (admin only, default self)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Resolve the authoritative status of a user on a day

    **Authorization:**
    - Requires role level >= 1 for own status
    - Requires role level >= 50 to query another user

    **Precedence:** attendance > approved leave > approved WFH > ABSENT (past days)
    """
    target_user = user_id or current_user["user_id"]
    if target_user != current_user["user_id"] and not is_admin(current_user):
        raise ForbiddenException("Only admins can view other users' status")

    day_status = status_resolver.resolve_day_status(db, target_user, day)

    response = DataResponse(
        success=True,
        message="Day status resolved successfully",
        data=day_status
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/me",
    response_model=PaginationResponse[Attendance],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_attendance(
    date_from: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    limit: int = Query(50, ge=1, le=100, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's attendance history

    **Authorization:**
    - Requires role level >= 1
    """
    user_id = current_user["user_id"]

    rows = attendance_service.get_user_history(db, user_id, date_from, date_to, offset, limit)
    total = attendance_service.count_attendance_admin(
        db, user_id=user_id, date_from=date_from, date_to=date_to
    )

    response = PaginationResponse(
        success=True,
        message="Attendance history retrieved successfully",
        data=rows,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/",
    response_model=PaginationResponse[Attendance],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_attendance_admin(
    user_id: Optional[int] = Query(None, description="Filter by user ID"),
    office_id: Optional[str] = Query(None, description="Filter by office ID"),
    date_from: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    status_filter: Optional[AttendanceStatus] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    sort: str = Query("desc", pattern="^(asc|desc)$", description="Sort order by day"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get attendance rows (Admin only)

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Query Parameters:**
    - user_id / office_id: Filter by user or office
    - date_from/date_to: Date range filter (YYYY-MM-DD)
    - status: PRESENT, LATE, WFH, LEAVE or ABSENT
    - sort: asc or desc (default desc)
    """
    status_value = status_filter.value if status_filter else None

    rows = attendance_service.get_attendance_admin(
        db, user_id, office_id, date_from, date_to, status_value, offset, limit, sort
    )
    total = attendance_service.count_attendance_admin(
        db, user_id, office_id, date_from, date_to, status_value
    )

    response = PaginationResponse(
        success=True,
        message="Attendance retrieved successfully",
        data=rows,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)
