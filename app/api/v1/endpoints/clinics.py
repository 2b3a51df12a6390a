"""
Clinic Endpoints - Geofence location configuration
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.db.session import get_db
from app.services.clinic_service import ClinicService
from app.schemas import Clinic, ClinicLocationUpdate, DataResponse
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core.permissions import Capability
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
clinic_service = ClinicService()


@router.patch(
    "/location",
    response_model=DataResponse[Clinic],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.MANAGE_CLINIC_LOCATION))]
)
async def update_clinic_location(
    request: ClinicLocationUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Set clinic coordinates and geofence radius

    **Authorization:**
    - Admin only

    **Body:**
    - clinic_id: Clinic to update (optional, default: tenant's first clinic)
    - latitude, longitude: Clinic center
    - allowed_radius_meters: Geofence radius (optional, default 100)
    """
    clinic = clinic_service.update_location(db, current_user.client_id, request)

    return DataResponse(
        success=True,
        message="Clinic location updated successfully",
        data=clinic
    )


@router.get(
    "/location",
    response_model=DataResponse[List[Clinic]],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.VIEW_CLINIC_LOCATION))]
)
async def get_clinic_locations(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    List tenant clinics with their geofence

    **Authorization:**
    - Admin or HR employee
    """
    clinics = clinic_service.get_clinics(db, current_user.client_id)

    response = DataResponse(
        success=True,
        message="Clinic locations retrieved successfully",
        data=clinics
    )

    return encrypt_response_data(response, settings)
