"""
Attendance Calculator - Derives worked / late / early-leave / overtime minutes
"""
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Union

from app.schemas.work_schedule import ScheduleRules


@dataclass(frozen=True)
class AttendanceMetrics:
    total_minutes: Optional[int] = None
    late_minutes: Optional[int] = None
    early_leave_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None
    status: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.status is None


def parse_clock(value: Union[str, time]) -> time:
    """Accept a ``time`` or an ``HH:MM[:SS]`` string"""
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


def _whole_minutes(delta: timedelta) -> int:
    # Floor division keeps partial minutes out of the result
    return int(delta.total_seconds() // 60)


def compute(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    schedule: Optional[ScheduleRules]
) -> AttendanceMetrics:
    """
    Compute attendance metrics for one work day

    Scheduled start/end are the schedule's clock times on the calendar date of
    check_in, so shifts crossing midnight are not supported. Both timestamps
    must be in the same (local) time base.

    Returns:
        AttendanceMetrics: empty when any input is missing
    """
    if check_in is None or check_out is None or schedule is None:
        return AttendanceMetrics()

    scheduled_start = datetime.combine(
        check_in.date(), parse_clock(schedule.start_time), tzinfo=check_in.tzinfo
    )
    scheduled_end = datetime.combine(
        check_in.date(), parse_clock(schedule.end_time), tzinfo=check_in.tzinfo
    )

    total_minutes = max(0, _whole_minutes(check_out - check_in))

    # Grace only shields lateness, early arrival earns nothing
    raw_late = max(0, _whole_minutes(check_in - scheduled_start))
    late_minutes = max(0, raw_late - (schedule.grace_minutes or 0))

    early_leave_minutes = max(0, _whole_minutes(scheduled_end - check_out))

    overtime_minutes = 0
    if schedule.overtime_enabled:
        overtime_minutes = max(0, _whole_minutes(check_out - scheduled_end))

    return AttendanceMetrics(
        total_minutes=total_minutes,
        late_minutes=late_minutes,
        early_leave_minutes=early_leave_minutes,
        overtime_minutes=overtime_minutes,
        status="late" if late_minutes > 0 else "normal",
    )
