"""
Office Location Endpoints - CRUD operations for office geofences
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas import (
    OfficeLocation,
    OfficeLocationCreate,
    OfficeLocationUpdate,
    DataResponse,
    PaginationResponse
)
from app.api.deps import require_auth, require_min_role_level, office_location_service
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()


@router.get(
    "/",
    response_model=PaginationResponse[OfficeLocation],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_office_locations(
    search: str = Query("", description="Search office locations by name"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get list of office locations with pagination and search

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    locations = office_location_service.list_locations(db, search=search, skip=skip, limit=limit)
    total = office_location_service.count_locations(db, search=search)

    response = PaginationResponse(
        success=True,
        message="Office locations retrieved successfully",
        data=locations,
        total=total,
        page=skip // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/{office_id}",
    response_model=DataResponse[OfficeLocation],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_office_location(
    office_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get single office location by ID

    **Authorization:**
    - Requires role level >= 1 (employees need the geofence for the check-in map)
    """
    location = office_location_service.get_location(db, office_id)

    response = DataResponse(
        success=True,
        message="Office location retrieved successfully",
        data=location
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/",
    response_model=DataResponse[OfficeLocation],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def create_office_location(
    location: OfficeLocationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Create new office location

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Validation:**
    - ol_id: required, unique, max 50 characters
    - ol_lat / ol_lon: valid coordinates
    - ol_radius_m: 1..5000 meters
    """
    new_location = office_location_service.create_location(db, location)

    return DataResponse(
        success=True,
        message="Office location created successfully",
        data=new_location
    )


@router.put(
    "/{office_id}",
    response_model=DataResponse[OfficeLocation],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_office_location(
    office_id: str,
    location: OfficeLocationUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Update existing office location

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    updated_location = office_location_service.update_location(db, office_id, location)

    return DataResponse(
        success=True,
        message="Office location updated successfully",
        data=updated_location
    )


@router.delete(
    "/{office_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_min_role_level(50))]
)
async def delete_office_location(
    office_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Delete office location

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Note:**
    - Deletion fails if attendance rows reference the office
    """
    office_location_service.delete_location(db, office_id)

    # 204 returns no content
    return None
