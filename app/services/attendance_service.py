"""
Attendance Service - Check-in / check-out state machine per employee and work date
"""
from typing import List, Optional
from datetime import date
from sqlalchemy.orm import Session

from app.core import clock
from app.core.exceptions import (
    LocationRequired,
    NoBiometric,
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    NotCheckedIn
)
from app.repositories.clinic_repository import ClinicRepository
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.biometric_credential_repository import BiometricCredentialRepository
from app.services import geofence_service
from app.services.attendance_calculator import compute
from app.services.schedule_service import ScheduleService
from app.schemas.clinic import ClinicLocation
from app.schemas.attendance import (
    AttendanceRecord,
    AttendanceListItem,
    AttendanceActionRequest,
    CheckInResponse,
    CheckOutResponse
)
from atams.logging import get_logger

logger = get_logger(__name__)


class AttendanceService:
    def __init__(self) -> None:
        self.clinic_repo = ClinicRepository()
        self.attendance_repo = AttendanceRepository()
        self.credential_repo = BiometricCredentialRepository()
        self.schedule_service = ScheduleService()

    def _require_location(self, request: AttendanceActionRequest) -> geofence_service.GeoPoint:
        if request.latitude is None or request.longitude is None:
            raise LocationRequired()
        return geofence_service.GeoPoint(request.latitude, request.longitude)

    def _validate_geofence(
        self,
        db: Session,
        client_id: int,
        point: geofence_service.GeoPoint
    ) -> geofence_service.GeoFenceResult:
        """
        Raises:
            NoClinicLocation: Tenant has no clinic with coordinates
            OutsideRange: Point is outside every clinic geofence
        """
        clinics = [
            ClinicLocation.model_validate(c)
            for c in self.clinic_repo.get_located_clinics(db, client_id)
        ]
        return geofence_service.evaluate(point, clinics)

    def check_in(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        request: AttendanceActionRequest
    ) -> CheckInResponse:
        """
        Open today's attendance record

        Checks run in order: location present, inside a clinic geofence,
        biometrics registered, no record yet for the work date.

        Raises:
            LocationRequired, NoClinicLocation, OutsideRange, NoBiometric, AlreadyCheckedIn
        """
        point = self._require_location(request)
        geo = self._validate_geofence(db, client_id, point)

        if self.credential_repo.count_for_employee(db, client_id, employee_id) == 0:
            raise NoBiometric()

        now = clock.now_local()
        work_date = now.date()

        if self.attendance_repo.get_for_date(db, client_id, employee_id, work_date):
            raise AlreadyCheckedIn()

        rules = self.schedule_service.rules_for(db, client_id, employee_id, work_date)
        if rules is not None and not rules.works_on(work_date.isoweekday()):
            status = "weekend"
        else:
            status = "incomplete"

        record = self.attendance_repo.insert_check_in(db, {
            "ar_client_id": client_id,
            "ar_employee_id": employee_id,
            "ar_work_date": work_date,
            "ar_check_in": now,
            "ar_check_in_lat": point.latitude,
            "ar_check_in_lng": point.longitude,
            "ar_device_info": request.device_info,
            "ar_status": status
        })
        if record is None:
            raise AlreadyCheckedIn()

        logger.info(
            "Employee checked in",
            extra={'extra_data': {
                "client_id": client_id,
                "employee_id": employee_id,
                "work_date": work_date.isoformat(),
                "clinic_id": geo.clinic.cl_id,
                "distance_m": round(geo.distance_meters)
            }}
        )

        return CheckInResponse(time=now, clinic_name=geo.clinic.cl_name, status=status)

    def check_out(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        request: AttendanceActionRequest
    ) -> CheckOutResponse:
        """
        Close today's attendance record and store its metrics

        The record state is checked before the geofence so an employee who
        never checked in is told so wherever they are.

        Raises:
            LocationRequired, NotCheckedIn, AlreadyCheckedOut, NoClinicLocation, OutsideRange
        """
        point = self._require_location(request)

        now = clock.now_local()
        work_date = now.date()

        record = self.attendance_repo.get_for_date(db, client_id, employee_id, work_date)
        if record is None or record.ar_check_in is None:
            raise NotCheckedIn()
        if record.ar_check_out is not None:
            raise AlreadyCheckedOut()

        self._validate_geofence(db, client_id, point)

        rules = self.schedule_service.rules_for(db, client_id, employee_id, work_date)
        metrics = compute(clock.as_local(record.ar_check_in), now, rules)
        status = metrics.status or "normal"

        closed = self.attendance_repo.close_check_out(db, client_id, record.ar_id, {
            "ar_check_out": now,
            "ar_check_out_lat": point.latitude,
            "ar_check_out_lng": point.longitude,
            "ar_total_minutes": metrics.total_minutes or 0,
            "ar_late_minutes": metrics.late_minutes or 0,
            "ar_early_leave_minutes": metrics.early_leave_minutes or 0,
            "ar_overtime_minutes": metrics.overtime_minutes or 0,
            "ar_status": status
        })
        if not closed:
            raise AlreadyCheckedOut()

        logger.info(
            "Employee checked out",
            extra={'extra_data': {
                "client_id": client_id,
                "employee_id": employee_id,
                "work_date": work_date.isoformat(),
                "total_minutes": metrics.total_minutes,
                "status": status
            }}
        )

        return CheckOutResponse(
            time=now,
            total_minutes=metrics.total_minutes,
            late_minutes=metrics.late_minutes,
            overtime_minutes=metrics.overtime_minutes,
            status=status
        )

    def get_today_record(self, db: Session, client_id: int, employee_id: int) -> Optional[AttendanceRecord]:
        record = self.attendance_repo.get_for_date(db, client_id, employee_id, clock.now_local().date())
        if record is None:
            return None
        return AttendanceRecord.model_validate(record)

    def get_records_admin(
        self,
        db: Session,
        client_id: int,
        date_from: date = None,
        date_to: date = None,
        employee_id: int = None,
        status: str = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[AttendanceListItem]:
        """Get tenant attendance records for admin (with filters)"""
        rows = self.attendance_repo.get_records_with_filters(
            db, client_id, date_from, date_to, employee_id, status, skip, limit
        )
        items = []
        for record, employee_name in rows:
            item = AttendanceRecord.model_validate(record).model_dump()
            items.append(AttendanceListItem(employee_name=employee_name, **item))
        return items

    def count_records_admin(
        self,
        db: Session,
        client_id: int,
        date_from: date = None,
        date_to: date = None,
        employee_id: int = None,
        status: str = None
    ) -> int:
        return self.attendance_repo.count_records_with_filters(
            db, client_id, date_from, date_to, employee_id, status
        )
