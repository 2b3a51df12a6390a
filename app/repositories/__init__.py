from .clinic_repository import ClinicRepository
from .employee_repository import EmployeeRepository
from .work_schedule_repository import WorkScheduleRepository
from .attendance_repository import AttendanceRepository
from .biometric_credential_repository import BiometricCredentialRepository
from .webauthn_challenge_repository import WebAuthnChallengeRepository

__all__ = [
    "ClinicRepository",
    "EmployeeRepository",
    "WorkScheduleRepository",
    "AttendanceRepository",
    "BiometricCredentialRepository",
    "WebAuthnChallengeRepository"
]
