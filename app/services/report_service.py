"""
Report Service - Monthly attendance summaries
"""
import calendar
from datetime import date
from sqlalchemy.orm import Session

from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.attendance import AttendanceRecord
from app.schemas.report import MonthlyReport, MonthlySummary
from atams.exceptions import BadRequestException, NotFoundException


def parse_month(month: str):
    """
    Parse YYYY-MM into the first and last day of that month

    Raises:
        BadRequestException: Invalid month format
    """
    try:
        year, month_number = (int(part) for part in month.split("-"))
        first = date(year, month_number, 1)
    except ValueError:
        raise BadRequestException("Invalid month format. Use YYYY-MM")

    last = date(year, month_number, calendar.monthrange(year, month_number)[1])
    return first, last


class ReportService:
    def __init__(self) -> None:
        self.attendance_repo = AttendanceRepository()
        self.employee_repo = EmployeeRepository()

    def monthly_report(self, db: Session, client_id: int, employee_id: int, month: str) -> MonthlyReport:
        """
        Per-day records and totals for one employee and month

        Raises:
            BadRequestException: Invalid month format
            NotFoundException: Employee not found in this tenant
        """
        first, last = parse_month(month)

        if not self.employee_repo.get_tenant_employee(db, client_id, employee_id):
            raise NotFoundException("Employee not found")

        records = self.attendance_repo.get_range(db, client_id, employee_id, first, last)

        summary = MonthlySummary()
        for record in records:
            if record.ar_check_in is not None:
                summary.days_present += 1
            summary.total_work_minutes += record.ar_total_minutes or 0
            summary.total_late_minutes += record.ar_late_minutes or 0
            summary.total_overtime_minutes += record.ar_overtime_minutes or 0
            summary.total_early_leave_minutes += record.ar_early_leave_minutes or 0

        return MonthlyReport(
            month=f"{first.year:04d}-{first.month:02d}",
            employee_id=employee_id,
            summary=summary,
            days=[AttendanceRecord.model_validate(r) for r in records]
        )
