"""
Clinic Service - Tenant clinic geofence configuration
"""
from typing import List
from sqlalchemy.orm import Session

from app.core import clock
from app.core.config import settings
from app.repositories.clinic_repository import ClinicRepository
from app.schemas.clinic import Clinic, ClinicLocationUpdate
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class ClinicService:
    def __init__(self) -> None:
        self.clinic_repo = ClinicRepository()

    def get_clinics(self, db: Session, client_id: int) -> List[Clinic]:
        """Tenant clinics, lowest id first"""
        clinics = self.clinic_repo.get_tenant_clinics(db, client_id)
        return [Clinic.model_validate(c) for c in clinics]

    def update_location(self, db: Session, client_id: int, request: ClinicLocationUpdate) -> Clinic:
        """
        Set a clinic's coordinates and radius

        Without clinic_id the tenant's first clinic is updated.

        Raises:
            NotFoundException: Clinic not found in this tenant
        """
        clinic = self.clinic_repo.get_tenant_clinic(db, client_id, request.clinic_id)
        if not clinic:
            raise NotFoundException("Clinic not found")

        radius = request.allowed_radius_meters or settings.GEOFENCE_DEFAULT_RADIUS_M
        clinic = self.clinic_repo.update_location(
            db, clinic, request.latitude, request.longitude, radius, clock.now_local()
        )

        logger.info(
            "Clinic location updated",
            extra={'extra_data': {"client_id": client_id, "clinic_id": clinic.cl_id, "radius_m": radius}}
        )
        return Clinic.model_validate(clinic)
