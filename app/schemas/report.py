"""
Report Schemas
"""
from typing import List
from pydantic import BaseModel

from app.schemas.attendance import AttendanceRecord


class MonthlySummary(BaseModel):
    days_present: int = 0
    total_work_minutes: int = 0
    total_late_minutes: int = 0
    total_overtime_minutes: int = 0
    total_early_leave_minutes: int = 0


class MonthlyReport(BaseModel):
    month: str
    employee_id: int
    summary: MonthlySummary
    days: List[AttendanceRecord]
