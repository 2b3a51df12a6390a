"""
Test data builders and token helpers
"""
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

import jwt

from app.core.config import settings
from app.models import Clinic, Employee, WorkSchedule, BiometricCredential

UTC = ZoneInfo("UTC")

CLINIC_LAT = 24.7136
CLINIC_LNG = 46.6753

# About 1.1 km north of the clinic
FAR_LAT = 24.7236


def at(year, month, day, hour=0, minute=0, second=0):
    """Aware timestamp in the test HR timezone"""
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


def make_token(**claims) -> str:
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def admin_headers(client_id: int = 1) -> dict:
    token = make_token(id=1, role="admin", type="user", client_id=client_id)
    return {"Authorization": f"Bearer {token}"}


def employee_headers(employee_id: int, client_id: int = 1) -> dict:
    token = make_token(
        id=100 + employee_id,
        role="staff",
        type="hr_employee",
        client_id=client_id,
        hr_employee_id=employee_id,
    )
    return {"Authorization": f"Bearer {token}"}


def add_clinic(db, client_id=1, name="Main Clinic", latitude=CLINIC_LAT, longitude=CLINIC_LNG, radius=100):
    clinic = Clinic(
        cl_client_id=client_id,
        cl_name=name,
        cl_latitude=latitude,
        cl_longitude=longitude,
        cl_allowed_radius_meters=radius,
    )
    db.add(clinic)
    db.commit()
    db.refresh(clinic)
    return clinic


def add_employee(db, client_id=1, username="nurse", with_schedule=True, effective_from=date(2025, 1, 1), **schedule):
    employee = Employee(
        em_client_id=client_id,
        em_full_name=f"{username.title()} Test",
        em_username=username,
        em_password="x",
        em_password_encoding="plain",
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)

    if with_schedule:
        add_schedule(db, employee, effective_from=effective_from, **schedule)
    return employee


def add_schedule(
    db,
    employee,
    effective_from=date(2025, 1, 1),
    effective_to=None,
    work_days=(1, 2, 3, 4, 5),
    start_time=time(9, 0),
    end_time=time(17, 0),
    grace_minutes=10,
    overtime_enabled=True,
):
    schedule = WorkSchedule(
        ws_client_id=employee.em_client_id,
        ws_employee_id=employee.em_id,
        ws_work_days=list(work_days),
        ws_start_time=start_time,
        ws_end_time=end_time,
        ws_grace_minutes=grace_minutes,
        ws_overtime_enabled=overtime_enabled,
        ws_effective_from=effective_from,
        ws_effective_to=effective_to,
    )
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


def add_credential(db, employee, credential_id="Y3JlZC0x", counter=0, transports=("internal",)):
    credential = BiometricCredential(
        bc_client_id=employee.em_client_id,
        bc_employee_id=employee.em_id,
        bc_credential_id=credential_id,
        bc_public_key="cHVibGljLWtleQ",
        bc_counter=counter,
        bc_transports=list(transports),
        bc_device_name="Test phone",
    )
    db.add(credential)
    db.commit()
    db.refresh(credential)
    return credential
