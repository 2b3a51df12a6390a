"""
Work Schedule Schemas
"""
from typing import Optional, List
from datetime import date, time, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone


def _validate_work_days(v: Optional[List[int]]) -> Optional[List[int]]:
    if v is None:
        return v
    if any(day < 1 or day > 7 for day in v):
        raise ValueError("work_days must be ISO weekdays between 1 (Monday) and 7 (Sunday)")
    return sorted(set(v))


class ScheduleRules(BaseModel):
    """The parts of a schedule the attendance calculation depends on"""
    work_days: List[int]
    start_time: time
    end_time: time
    grace_minutes: int = 10
    overtime_enabled: bool = True

    def works_on(self, iso_weekday: int) -> bool:
        return iso_weekday in self.work_days

    @classmethod
    def from_model(cls, schedule) -> "ScheduleRules":
        return cls(
            work_days=schedule.ws_work_days or [],
            start_time=schedule.ws_start_time,
            end_time=schedule.ws_end_time,
            grace_minutes=schedule.ws_grace_minutes or 0,
            overtime_enabled=bool(schedule.ws_overtime_enabled),
        )


class ScheduleInput(BaseModel):
    """Schedule fields accepted on employee create/update"""
    work_days: Optional[List[int]] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    grace_minutes: Optional[int] = Field(None, ge=0)
    overtime_enabled: Optional[bool] = None
    effective_from: Optional[date] = None

    @field_validator('work_days')
    @classmethod
    def check_work_days(cls, v):
        return _validate_work_days(v)

    def has_changes(self) -> bool:
        return bool(self.model_dump(exclude_unset=True, exclude_none=True))


class WorkSchedule(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ws_id: int
    ws_employee_id: int
    ws_work_days: List[int]
    ws_start_time: time
    ws_end_time: time
    ws_grace_minutes: int
    ws_overtime_enabled: bool
    ws_effective_from: date
    ws_effective_to: Optional[date] = None
    ws_created_at: Optional[datetime] = None

    @field_validator('ws_created_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)
