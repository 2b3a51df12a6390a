from .clinic import Clinic
from .employee import Employee
from .work_schedule import WorkSchedule
from .attendance_record import AttendanceRecord
from .biometric_credential import BiometricCredential
from .webauthn_challenge import WebAuthnChallenge

__all__ = [
    "Clinic",
    "Employee",
    "WorkSchedule",
    "AttendanceRecord",
    "BiometricCredential",
    "WebAuthnChallenge"
]
