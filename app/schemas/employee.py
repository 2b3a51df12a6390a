"""
Employee Schemas for request/response validation
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone
from app.schemas.work_schedule import ScheduleInput, WorkSchedule
from app.schemas.attendance import AttendanceRecord


class EmployeeCreate(ScheduleInput):
    full_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None

    def schedule(self) -> ScheduleInput:
        return ScheduleInput(**self.model_dump(include=set(ScheduleInput.model_fields), exclude_unset=True))


class EmployeeUpdate(ScheduleInput):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None

    def profile_changes(self) -> dict:
        return self.model_dump(include={"full_name", "phone", "email", "status"}, exclude_none=True)

    def schedule(self) -> ScheduleInput:
        return ScheduleInput(**self.model_dump(include=set(ScheduleInput.model_fields), exclude_unset=True))


class Employee(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    em_id: int
    em_client_id: int
    em_full_name: str
    em_username: str
    em_phone: Optional[str] = None
    em_email: Optional[str] = None
    em_status: str
    em_created_at: Optional[datetime] = None
    em_updated_at: Optional[datetime] = None

    @field_validator('em_created_at', 'em_updated_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class EmployeeListItem(Employee):
    bio_registered: bool = False
    schedule: Optional[WorkSchedule] = None


class EmployeeCreated(BaseModel):
    em_id: int
    em_username: str


class PasswordReset(BaseModel):
    password: Optional[str] = Field(None, min_length=1)


class PasswordResetResponse(BaseModel):
    """Plaintext is returned once so the admin can hand it over"""
    password: str


class EmployeeProfile(Employee):
    bio_registered: bool
    bio_count: int
    schedule: Optional[WorkSchedule] = None
    today_attendance: Optional[AttendanceRecord] = None
