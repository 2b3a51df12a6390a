"""
Attendance Schemas for records and check-in/check-out
"""
from typing import Optional, Literal
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone

AttendanceStatus = Literal["weekend", "incomplete", "normal", "late"]


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ar_id: int
    ar_employee_id: int
    ar_work_date: date
    ar_check_in: Optional[datetime] = None
    ar_check_out: Optional[datetime] = None
    ar_total_minutes: Optional[int] = None
    ar_late_minutes: Optional[int] = None
    ar_early_leave_minutes: Optional[int] = None
    ar_overtime_minutes: Optional[int] = None
    ar_status: AttendanceStatus

    @field_validator('ar_check_in', 'ar_check_out', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class AttendanceListItem(AttendanceRecord):
    employee_name: str


# Request/Response schemas for API endpoints
class AttendanceActionRequest(BaseModel):
    """Request schema for check-in and check-out"""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    device_info: Optional[str] = Field(None, max_length=512)


class CheckInResponse(BaseModel):
    time: datetime
    clinic_name: str
    status: AttendanceStatus


class CheckOutResponse(BaseModel):
    time: datetime
    total_minutes: Optional[int] = None
    late_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None
    status: AttendanceStatus
