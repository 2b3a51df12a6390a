"""
Clinic Repository - Data access layer for tenant clinics
"""
from typing import Optional, List
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.clinic import Clinic


class ClinicRepository(BaseRepository[Clinic]):
    def __init__(self):
        super().__init__(Clinic)

    def get_tenant_clinics(self, db: Session, client_id: int) -> List[Clinic]:
        """All clinics of a tenant, lowest id first"""
        return db.query(Clinic).filter(
            Clinic.cl_client_id == client_id
        ).order_by(Clinic.cl_id.asc()).all()

    def get_located_clinics(self, db: Session, client_id: int) -> List[Clinic]:
        """Tenant clinics with both coordinates set, in geofence listing order"""
        return db.query(Clinic).filter(
            Clinic.cl_client_id == client_id,
            Clinic.cl_latitude.isnot(None),
            Clinic.cl_longitude.isnot(None)
        ).order_by(Clinic.cl_id.asc()).all()

    def get_tenant_clinic(self, db: Session, client_id: int, clinic_id: Optional[int] = None) -> Optional[Clinic]:
        """Given clinic of the tenant, or the tenant's first clinic when no id is passed"""
        query = db.query(Clinic).filter(Clinic.cl_client_id == client_id)
        if clinic_id is not None:
            query = query.filter(Clinic.cl_id == clinic_id)
        return query.order_by(Clinic.cl_id.asc()).first()

    def update_location(
        self,
        db: Session,
        clinic: Clinic,
        latitude: float,
        longitude: float,
        allowed_radius_meters: int,
        updated_at: datetime
    ) -> Clinic:
        return self.update(db, clinic, {
            "cl_latitude": latitude,
            "cl_longitude": longitude,
            "cl_allowed_radius_meters": allowed_radius_meters,
            "cl_location_updated_at": updated_at
        })
