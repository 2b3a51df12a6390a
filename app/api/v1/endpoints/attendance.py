"""
Attendance Endpoints - Check-in, check-out and attendance history
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from app.db.session import get_db
from app.services.attendance_service import AttendanceService
from app.schemas import (
    AttendanceActionRequest,
    CheckInResponse,
    CheckOutResponse,
    DataResponse,
    PaginationResponse
)
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core.permissions import Capability
from app.core.config import settings
from atams.encryption import encrypt_response_data
from atams.exceptions import BadRequestException

router = APIRouter()
attendance_service = AttendanceService()


def _parse_date(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise BadRequestException(f"Invalid {name} format. Use YYYY-MM-DD")


@router.post(
    "/check-in",
    response_model=DataResponse[CheckInResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.RECORD_ATTENDANCE))]
)
async def check_in(
    request: AttendanceActionRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Check in for today

    **Authorization:**
    - HR employee only

    **Process:**
    1. Location required
    2. Geofence validation against the tenant's clinics
    3. At least one biometric credential registered
    4. One record per employee and work date

    **Errors:**
    - 400: GPS_REQUIRED, NO_CLINIC_LOCATION, OUTSIDE_RANGE, NO_BIOMETRIC
    - 409: ALREADY_CHECKED_IN
    """
    result = attendance_service.check_in(
        db, current_user.client_id, current_user.employee_id(), request
    )

    return DataResponse(
        success=True,
        message="Checked in",
        data=result
    )


@router.post(
    "/check-out",
    response_model=DataResponse[CheckOutResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.RECORD_ATTENDANCE))]
)
async def check_out(
    request: AttendanceActionRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Check out for today

    **Authorization:**
    - HR employee only

    **Response:**
    - Worked, late and overtime minutes against the schedule effective today

    **Errors:**
    - 400: GPS_REQUIRED, NOT_CHECKED_IN, NO_CLINIC_LOCATION, OUTSIDE_RANGE
    - 409: ALREADY_CHECKED_OUT
    """
    result = attendance_service.check_out(
        db, current_user.client_id, current_user.employee_id(), request
    )

    return DataResponse(
        success=True,
        message="Checked out",
        data=result
    )


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.VIEW_ATTENDANCE))]
)
async def get_attendance_records(
    date_from: Optional[str] = Query(None, alias="from", description="Start date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="End date (YYYY-MM-DD)"),
    employee_id: Optional[int] = Query(None, description="Filter by employee ID"),
    status: Optional[str] = Query(None, pattern="^(weekend|incomplete|normal|late)$", description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Get tenant attendance records (Admin only)

    **Authorization:**
    - Admin only

    **Query Parameters:**
    - from/to: Work date range (YYYY-MM-DD)
    - employee_id: Filter by employee
    - status: weekend, incomplete, normal or late
    - limit: Max records (1-1000, default 100)
    - offset: Skip records (default 0)
    """
    parsed_from = _parse_date(date_from, "from")
    parsed_to = _parse_date(date_to, "to")

    records = attendance_service.get_records_admin(
        db, current_user.client_id, parsed_from, parsed_to, employee_id, status, offset, limit
    )
    total = attendance_service.count_records_admin(
        db, current_user.client_id, parsed_from, parsed_to, employee_id, status
    )

    response = PaginationResponse(
        success=True,
        message="Attendance records retrieved successfully",
        data=records,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)
