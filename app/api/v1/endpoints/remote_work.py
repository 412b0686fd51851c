"""
WFH Log Endpoints - Remote work submission and admin validation
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas import WfhLog, WfhLogCreate, WfhLogValidate, DataResponse, PaginationResponse
from app.api.deps import require_auth, require_min_role_level, remote_work_service
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()


@router.post(
    "/",
    response_model=DataResponse[WfhLog],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def submit_wfh_log(
    payload: WfhLogCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Submit a WFH log for today (or a past day)

    **Authorization:**
    - Requires role level >= 1

    **Errors:**
    - 400: INVALID_COORDINATES, INVALID_INPUT, INVALID_RANGE
    - 409: ALREADY_CHECKED_IN, DUPLICATE_REMOTE_WORK
    """
    log = remote_work_service.submit(db, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message="WFH log submitted successfully",
        data=log
    )


@router.post(
    "/{wl_id}/validate",
    response_model=DataResponse[WfhLog],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def validate_wfh_log(
    wl_id: int,
    payload: WfhLogValidate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Approve or reject a pending WFH log

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Errors:**
    - 404: NOT_FOUND
    - 409: ALREADY_DECIDED, DUPLICATE_ATTENDANCE
    """
    log = remote_work_service.validate(db, wl_id, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message=f"WFH log {log.wl_status.value.lower()} successfully",
        data=log
    )


@router.get(
    "/me",
    response_model=PaginationResponse[WfhLog],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_wfh_logs(
    limit: int = Query(50, ge=1, le=100, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's WFH logs, newest first

    **Authorization:**
    - Requires role level >= 1
    """
    logs = remote_work_service.list_user_logs(db, current_user["user_id"], offset, limit)

    response = PaginationResponse(
        success=True,
        message="WFH logs retrieved successfully",
        data=logs,
        total=len(logs),  # Simple count for user's own logs
        page=offset // limit + 1,
        size=limit,
        pages=1
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/pending",
    response_model=PaginationResponse[WfhLog],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_pending_wfh_logs(
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get WFH logs awaiting validation (Admin only)

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    logs = remote_work_service.list_pending(db, offset, limit)
    total = remote_work_service.count_pending(db)

    response = PaginationResponse(
        success=True,
        message="Pending WFH logs retrieved successfully",
        data=logs,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)
