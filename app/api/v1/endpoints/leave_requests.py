"""
Leave Request Endpoints - Leave submission and admin decisions
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.db.session import get_db
from app.schemas import LeaveRequest, LeaveRequestCreate, LeaveDecision, DataResponse, PaginationResponse
from app.api.deps import require_auth, require_min_role_level, leave_service
from app.core.config import settings
from app.core.enums import RequestStatus
from atams.encryption import encrypt_response_data

router = APIRouter()


@router.post(
    "/",
    response_model=DataResponse[LeaveRequest],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def submit_leave_request(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Submit a leave request

    **Authorization:**
    - Requires role level >= 1

    **Errors:**
    - 400: INVALID_RANGE (end date before start date)
    """
    leave = leave_service.submit(db, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message="Leave request submitted successfully",
        data=leave
    )


@router.put(
    "/{lr_id}/status",
    response_model=DataResponse[LeaveRequest],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def decide_leave_request(
    lr_id: int,
    payload: LeaveDecision,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Approve or reject a pending leave request

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Errors:**
    - 404: NOT_FOUND
    - 409: ALREADY_DECIDED
    """
    leave = leave_service.decide(db, lr_id, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message=f"Leave request {leave.lr_status.value.lower()} successfully",
        data=leave
    )


@router.get(
    "/me",
    response_model=PaginationResponse[LeaveRequest],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_leave_requests(
    status_filter: Optional[RequestStatus] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(50, ge=1, le=100, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's leave requests

    **Authorization:**
    - Requires role level >= 1
    """
    user_id = current_user["user_id"]
    status_value = status_filter.value if status_filter else None

    leaves = leave_service.list_user_leaves(db, user_id, status_value, offset, limit)
    total = leave_service.count_leaves(db, user_id=user_id, status=status_value)

    response = PaginationResponse(
        success=True,
        message="Leave requests retrieved successfully",
        data=leaves,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/",
    response_model=PaginationResponse[LeaveRequest],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_leave_requests(
    user_id: Optional[int] = Query(None, description="Filter by user ID"),
    status_filter: Optional[RequestStatus] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get leave requests (Admin only)

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    status_value = status_filter.value if status_filter else None

    leaves = leave_service.list_leaves(db, user_id, status_value, offset, limit)
    total = leave_service.count_leaves(db, user_id=user_id, status=status_value)

    response = PaginationResponse(
        success=True,
        message="Leave requests retrieved successfully",
        data=leaves,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)
