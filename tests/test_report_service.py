from datetime import date

import pytest

from app.models import AttendanceRecord
from app.services.report_service import ReportService, parse_month
from atams.exceptions import BadRequestException, NotFoundException
from tests.helpers import at, add_employee


def add_record(db, employee, work_date, check_in=None, check_out=None, status="normal", **minutes):
    record = AttendanceRecord(
        ar_client_id=employee.em_client_id,
        ar_employee_id=employee.em_id,
        ar_work_date=work_date,
        ar_check_in=check_in,
        ar_check_out=check_out,
        ar_status=status,
        ar_total_minutes=minutes.get("total", 0),
        ar_late_minutes=minutes.get("late", 0),
        ar_overtime_minutes=minutes.get("overtime", 0),
        ar_early_leave_minutes=minutes.get("early", 0),
    )
    db.add(record)
    db.commit()
    return record


def test_parse_month_bounds():
    assert parse_month("2025-03") == (date(2025, 3, 1), date(2025, 3, 31))
    assert parse_month("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert parse_month("2025-02") == (date(2025, 2, 1), date(2025, 2, 28))


@pytest.mark.parametrize("month", ["2025", "2025-13", "march", "2025-03-01"])
def test_parse_month_rejects_bad_input(month):
    with pytest.raises(BadRequestException):
        parse_month(month)


def test_monthly_report_totals(db):
    employee = add_employee(db)
    add_record(
        db, employee, date(2025, 3, 3), at(2025, 3, 3, 9, 15), at(2025, 3, 3, 17, 45),
        status="late", total=510, late=15, overtime=45,
    )
    add_record(
        db, employee, date(2025, 3, 4), at(2025, 3, 4, 9, 0), at(2025, 3, 4, 16, 30),
        total=450, early=30,
    )
    add_record(db, employee, date(2025, 3, 5), at(2025, 3, 5, 9, 0), status="incomplete")
    # Outside the month
    add_record(db, employee, date(2025, 4, 1), at(2025, 4, 1, 9, 0), total=480)

    report = ReportService().monthly_report(db, 1, employee.em_id, "2025-03")

    assert report.month == "2025-03"
    assert report.employee_id == employee.em_id
    assert report.summary.days_present == 3
    assert report.summary.total_work_minutes == 960
    assert report.summary.total_late_minutes == 15
    assert report.summary.total_overtime_minutes == 45
    assert report.summary.total_early_leave_minutes == 30
    assert [d.ar_work_date for d in report.days] == [date(2025, 3, 3), date(2025, 3, 4), date(2025, 3, 5)]


def test_monthly_report_empty_month(db):
    employee = add_employee(db)

    report = ReportService().monthly_report(db, 1, employee.em_id, "2025-02")

    assert report.summary.days_present == 0
    assert report.days == []


def test_monthly_report_other_tenant(db):
    employee = add_employee(db, client_id=2)

    with pytest.raises(NotFoundException):
        ReportService().monthly_report(db, 1, employee.em_id, "2025-03")
