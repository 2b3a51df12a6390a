"""
Employee Service - HR employee administration and self profile
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core import clock
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.biometric_credential_repository import BiometricCredentialRepository
from app.services.attendance_service import AttendanceService
from app.services.password_service import PasswordService
from app.services.schedule_service import ScheduleService
from app.models.employee import Employee as EmployeeModel
from app.schemas.employee import (
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeListItem,
    EmployeeCreated,
    EmployeeProfile,
    PasswordResetResponse
)
from app.schemas.work_schedule import WorkSchedule
from atams.exceptions import NotFoundException, ConflictException
from atams.logging import get_logger

logger = get_logger(__name__)


class EmployeeService:
    def __init__(self) -> None:
        self.employee_repo = EmployeeRepository()
        self.credential_repo = BiometricCredentialRepository()
        self.schedule_service = ScheduleService()
        self.attendance_service = AttendanceService()
        self.password_service = PasswordService()

    def _get_employee(self, db: Session, client_id: int, employee_id: int) -> EmployeeModel:
        employee = self.employee_repo.get_tenant_employee(db, client_id, employee_id)
        if not employee:
            raise NotFoundException("Employee not found")
        return employee

    def _current_schedule(self, db: Session, client_id: int, employee_id: int) -> Optional[WorkSchedule]:
        schedule = self.schedule_service.resolve(db, client_id, employee_id, clock.now_local().date())
        return WorkSchedule.model_validate(schedule) if schedule else None

    def get_employees(self, db: Session, client_id: int) -> List[EmployeeListItem]:
        """Tenant employees with biometric flag and today's schedule"""
        registered = self.credential_repo.get_registered_employee_ids(db, client_id)
        items = []
        for employee in self.employee_repo.get_tenant_employees(db, client_id):
            item = Employee.model_validate(employee).model_dump()
            items.append(EmployeeListItem(
                bio_registered=employee.em_id in registered,
                schedule=self._current_schedule(db, client_id, employee.em_id),
                **item
            ))
        return items

    def create_employee(self, db: Session, client_id: int, request: EmployeeCreate) -> EmployeeCreated:
        """
        Create an employee with its initial schedule

        Raises:
            ConflictException: Username already used in this tenant
        """
        if self.employee_repo.username_exists(db, client_id, request.username):
            raise ConflictException("Username already exists")

        password, encoding = self.password_service.encode(request.password)
        today = clock.now_local().date()
        schedule_input = request.schedule()
        schedule_data = self.schedule_service.build_schedule_data(
            schedule_input, schedule_input.effective_from or today
        )

        employee = self.employee_repo.create_with_schedule(db, {
            "em_client_id": client_id,
            "em_full_name": request.full_name,
            "em_username": request.username,
            "em_password": password,
            "em_password_encoding": encoding.value,
            "em_phone": request.phone,
            "em_email": request.email
        }, schedule_data)

        logger.info(
            "Employee created",
            extra={'extra_data': {"client_id": client_id, "employee_id": employee.em_id}}
        )
        return EmployeeCreated(em_id=employee.em_id, em_username=employee.em_username)

    def update_employee(self, db: Session, client_id: int, employee_id: int, request: EmployeeUpdate) -> Employee:
        """
        Update profile fields; any schedule field starts a new schedule version

        The schedule change is validated before anything is written, so a
        rejected schedule leaves the profile untouched.

        Raises:
            NotFoundException: Employee not found in this tenant
            BadRequestException: Invalid schedule change
        """
        employee = self._get_employee(db, client_id, employee_id)

        replacement = None
        schedule_input = request.schedule()
        if schedule_input.has_changes():
            replacement = self.schedule_service.prepare_replacement(
                db, client_id, employee_id, schedule_input, clock.now_local().date()
            )

        changes = {f"em_{key}": value for key, value in request.profile_changes().items()}
        if changes:
            employee = self.employee_repo.update(db, employee, changes)

        if replacement is not None:
            self.schedule_service.apply_replacement(db, client_id, employee_id, replacement)

        return Employee.model_validate(employee)

    def deactivate_employee(self, db: Session, client_id: int, employee_id: int) -> Employee:
        employee = self._get_employee(db, client_id, employee_id)
        employee = self.employee_repo.update(db, employee, {"em_status": "inactive"})

        logger.info(
            "Employee deactivated",
            extra={'extra_data': {"client_id": client_id, "employee_id": employee_id}}
        )
        return Employee.model_validate(employee)

    def reset_password(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        password: Optional[str] = None
    ) -> PasswordResetResponse:
        """Set the given or a generated password; the plaintext is returned once"""
        employee = self._get_employee(db, client_id, employee_id)

        new_password = password or self.password_service.generate()
        stored, encoding = self.password_service.encode(new_password)
        self.employee_repo.update(db, employee, {
            "em_password": stored,
            "em_password_encoding": encoding.value
        })

        logger.info(
            "Employee password reset",
            extra={'extra_data': {"client_id": client_id, "employee_id": employee_id}}
        )
        return PasswordResetResponse(password=new_password)

    def get_profile(self, db: Session, client_id: int, employee_id: int) -> EmployeeProfile:
        """Self view: profile, today's schedule, biometric count and today's record"""
        employee = self._get_employee(db, client_id, employee_id)
        bio_count = self.credential_repo.count_for_employee(db, client_id, employee_id)

        return EmployeeProfile(
            bio_registered=bio_count > 0,
            bio_count=bio_count,
            schedule=self._current_schedule(db, client_id, employee_id),
            today_attendance=self.attendance_service.get_today_record(db, client_id, employee_id),
            **Employee.model_validate(employee).model_dump()
        )
