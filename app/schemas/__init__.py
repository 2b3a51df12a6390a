from .clinic import Clinic, ClinicLocation, ClinicLocationUpdate
from .work_schedule import WorkSchedule, ScheduleInput, ScheduleRules
from .attendance import (
    AttendanceRecord,
    AttendanceListItem,
    AttendanceActionRequest,
    CheckInResponse,
    CheckOutResponse
)
from .employee import (
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeListItem,
    EmployeeCreated,
    EmployeeProfile,
    PasswordReset,
    PasswordResetResponse
)
from .webauthn import RegistrationVerifyRequest, AuthenticationVerifyRequest, VerificationResponse
from .report import MonthlyReport, MonthlySummary
from .common import DataResponse, PaginationResponse

__all__ = [
    # Clinic schemas
    "Clinic",
    "ClinicLocation",
    "ClinicLocationUpdate",
    # Schedule schemas
    "WorkSchedule",
    "ScheduleInput",
    "ScheduleRules",
    # Attendance schemas
    "AttendanceRecord",
    "AttendanceListItem",
    "AttendanceActionRequest",
    "CheckInResponse",
    "CheckOutResponse",
    # Employee schemas
    "Employee",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeListItem",
    "EmployeeCreated",
    "EmployeeProfile",
    "PasswordReset",
    "PasswordResetResponse",
    # WebAuthn schemas
    "RegistrationVerifyRequest",
    "AuthenticationVerifyRequest",
    "VerificationResponse",
    # Report schemas
    "MonthlyReport",
    "MonthlySummary",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
