"""
Stable error codes for attendance operations

Every rejected operation raises one of the atams exceptions with the code in
``details["code"]`` so the global exception handler renders
``{"success": false, "message": ..., "details": {"code": ...}}``.
"""
from enum import Enum
from typing import Any, Dict, Optional

from atams.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
)


class ErrorCode(str, Enum):
    # Validation
    INVALID_COORDINATES = "INVALID_COORDINATES"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_INPUT = "INVALID_INPUT"
    # Conflict
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    CONFLICTING_REMOTE_WORK = "CONFLICTING_REMOTE_WORK"
    DUPLICATE_ATTENDANCE = "DUPLICATE_ATTENDANCE"
    DUPLICATE_REMOTE_WORK = "DUPLICATE_REMOTE_WORK"
    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    ALREADY_DECIDED = "ALREADY_DECIDED"
    # Policy
    HOLIDAY = "HOLIDAY"
    OUT_OF_GEOFENCE = "OUT_OF_GEOFENCE"
    # Configuration
    NO_OFFICE_CONFIGURED = "NO_OFFICE_CONFIGURED"
    # Lookup
    NOT_FOUND = "NOT_FOUND"


def _details(code: ErrorCode, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    details = {"code": code.value}
    if extra:
        details.update(extra)
    return details


def validation_error(code: ErrorCode, message: str, **extra: Any) -> BadRequestException:
    return BadRequestException(message, details=_details(code, extra))


def conflict_error(code: ErrorCode, message: str, **extra: Any) -> ConflictException:
    return ConflictException(message, details=_details(code, extra))


def policy_error(code: ErrorCode, message: str, **extra: Any) -> ForbiddenException:
    return ForbiddenException(message, details=_details(code, extra))


def not_found_error(message: str, **extra: Any) -> NotFoundException:
    return NotFoundException(message, details=_details(ErrorCode.NOT_FOUND, extra))
