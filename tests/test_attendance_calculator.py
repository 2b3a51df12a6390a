from datetime import time

import pytest

from app.schemas.work_schedule import ScheduleRules
from app.services.attendance_calculator import compute, parse_clock
from tests.helpers import at


@pytest.fixture
def schedule():
    return ScheduleRules(
        work_days=[1, 2, 3, 4, 5],
        start_time=time(9, 0),
        end_time=time(17, 0),
        grace_minutes=10,
        overtime_enabled=True,
    )


def test_arrival_within_grace_is_not_late(schedule):
    metrics = compute(at(2025, 3, 3, 9, 7), at(2025, 3, 3, 17, 0), schedule)

    assert metrics.late_minutes == 0
    assert metrics.total_minutes == 473
    assert metrics.status == "normal"


def test_grace_is_subtracted_from_lateness(schedule):
    metrics = compute(at(2025, 3, 3, 9, 25), at(2025, 3, 3, 17, 0), schedule)

    assert metrics.late_minutes == 15
    assert metrics.status == "late"


def test_partial_minutes_are_truncated(schedule):
    metrics = compute(at(2025, 3, 3, 9, 10, 59), at(2025, 3, 3, 17, 0, 30), schedule)

    # 10m59s raw lateness floors to 10, fully covered by grace
    assert metrics.late_minutes == 0
    assert metrics.total_minutes == 469
    assert metrics.overtime_minutes == 0


def test_overtime_after_scheduled_end(schedule):
    metrics = compute(at(2025, 3, 3, 9, 0), at(2025, 3, 3, 17, 45), schedule)

    assert metrics.overtime_minutes == 45
    assert metrics.early_leave_minutes == 0


def test_overtime_disabled_reports_zero(schedule):
    no_overtime = schedule.model_copy(update={"overtime_enabled": False})

    metrics = compute(at(2025, 3, 3, 9, 0), at(2025, 3, 3, 17, 45), no_overtime)

    assert metrics.overtime_minutes == 0
    assert metrics.total_minutes == 525


def test_early_leave_before_scheduled_end(schedule):
    metrics = compute(at(2025, 3, 3, 9, 0), at(2025, 3, 3, 16, 30), schedule)

    assert metrics.early_leave_minutes == 30
    assert metrics.overtime_minutes == 0
    assert metrics.status == "normal"


def test_check_out_before_check_in_clamps_total(schedule):
    metrics = compute(at(2025, 3, 3, 12, 0), at(2025, 3, 3, 11, 0), schedule)

    assert metrics.total_minutes == 0


def test_early_arrival_earns_nothing(schedule):
    metrics = compute(at(2025, 3, 3, 7, 30), at(2025, 3, 3, 17, 0), schedule)

    assert metrics.late_minutes == 0
    assert metrics.total_minutes == 570
    assert metrics.overtime_minutes == 0


@pytest.mark.parametrize("check_in, check_out, with_schedule", [
    (None, at(2025, 3, 3, 17, 0), True),
    (at(2025, 3, 3, 9, 0), None, True),
    (at(2025, 3, 3, 9, 0), at(2025, 3, 3, 17, 0), False),
])
def test_missing_input_gives_empty_metrics(schedule, check_in, check_out, with_schedule):
    metrics = compute(check_in, check_out, schedule if with_schedule else None)

    assert metrics.is_empty
    assert metrics.total_minutes is None
    assert metrics.late_minutes is None
    assert metrics.overtime_minutes is None


def test_schedule_times_accept_clock_strings():
    rules = ScheduleRules(work_days=[1], start_time="08:30", end_time="16:00")

    metrics = compute(at(2025, 3, 3, 8, 45), at(2025, 3, 3, 16, 10), rules)

    assert metrics.late_minutes == 5
    assert metrics.overtime_minutes == 10


def test_parse_clock():
    assert parse_clock("09:00") == time(9, 0)
    assert parse_clock("17:30:15") == time(17, 30, 15)
    assert parse_clock(time(8, 0)) == time(8, 0)
