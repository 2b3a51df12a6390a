from .clinic_service import ClinicService
from .employee_service import EmployeeService
from .schedule_service import ScheduleService
from .attendance_service import AttendanceService
from .challenge_service import ChallengeService
from .webauthn_service import WebAuthnService
from .report_service import ReportService
from .cleanup_service import CleanupService
from .token_service import TokenService
from .password_service import PasswordService, CredentialEncoding

__all__ = [
    "ClinicService",
    "EmployeeService",
    "ScheduleService",
    "AttendanceService",
    "ChallengeService",
    "WebAuthnService",
    "ReportService",
    "CleanupService",
    "TokenService",
    "PasswordService",
    "CredentialEncoding"
]
