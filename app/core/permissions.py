"""
Capability table

Maps the principal kind resolved from the bearer token to the actions it may
perform. Routes declare the capability they need; nothing else inspects role
strings.
"""
from enum import Enum
from typing import Dict, FrozenSet


class Capability(str, Enum):
    MANAGE_CLINIC_LOCATION = "clinic_location:manage"
    VIEW_CLINIC_LOCATION = "clinic_location:view"
    MANAGE_EMPLOYEES = "employees:manage"
    VIEW_ATTENDANCE = "attendance:view"
    RECORD_ATTENDANCE = "attendance:record"
    MANAGE_BIOMETRICS = "biometrics:manage"
    VIEW_SELF = "self:view"
    VIEW_OWN_REPORT = "reports:own"
    VIEW_ANY_REPORT = "reports:any"
    RUN_MAINTENANCE = "maintenance:run"


# Principal kinds
ADMIN = "admin"
HR_EMPLOYEE = "hr_employee"

ROLE_CAPABILITIES: Dict[str, FrozenSet[Capability]] = {
    ADMIN: frozenset({
        Capability.MANAGE_CLINIC_LOCATION,
        Capability.VIEW_CLINIC_LOCATION,
        Capability.MANAGE_EMPLOYEES,
        Capability.VIEW_ATTENDANCE,
        Capability.VIEW_ANY_REPORT,
        Capability.RUN_MAINTENANCE,
    }),
    HR_EMPLOYEE: frozenset({
        Capability.VIEW_CLINIC_LOCATION,
        Capability.RECORD_ATTENDANCE,
        Capability.MANAGE_BIOMETRICS,
        Capability.VIEW_SELF,
        Capability.VIEW_OWN_REPORT,
    }),
}


def principal_kind(role: str, user_type: str) -> str:
    """An hr_employee token is always an employee, whatever role it carries."""
    if user_type == HR_EMPLOYEE:
        return HR_EMPLOYEE
    return role or ""


def capabilities_for(role: str, user_type: str) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES.get(principal_kind(role, user_type), frozenset())
