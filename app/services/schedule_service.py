"""
Schedule Service - Effective schedule resolution and versioning
"""
from typing import Optional, Dict, Any, NamedTuple
from datetime import date, timedelta
from sqlalchemy.orm import Session

from app.repositories.work_schedule_repository import WorkScheduleRepository
from app.models.work_schedule import WorkSchedule
from app.schemas.work_schedule import ScheduleInput, ScheduleRules
from app.services.attendance_calculator import parse_clock
from app.core.config import settings
from atams.exceptions import BadRequestException
from atams.logging import get_logger

logger = get_logger(__name__)


class ScheduleReplacement(NamedTuple):
    """A validated schedule change: where to close the open version and the new row"""
    close_on: Optional[date]
    data: Dict[str, Any]


class ScheduleService:
    def __init__(self) -> None:
        self.schedule_repo = WorkScheduleRepository()

    def resolve(self, db: Session, client_id: int, employee_id: int, target_date: date) -> Optional[WorkSchedule]:
        """Schedule row effective on target_date, or None when the employee has no obligation"""
        return self.schedule_repo.resolve_for_date(db, client_id, employee_id, target_date)

    def rules_for(self, db: Session, client_id: int, employee_id: int, target_date: date) -> Optional[ScheduleRules]:
        schedule = self.resolve(db, client_id, employee_id, target_date)
        if schedule is None:
            return None
        return ScheduleRules.from_model(schedule)

    def build_schedule_data(
        self,
        schedule_input: ScheduleInput,
        effective_from: date,
        base: Optional[WorkSchedule] = None
    ) -> Dict[str, Any]:
        """
        Column values for a new schedule version

        Fields missing from the input are taken from ``base`` (the version being
        replaced) and then from the configured defaults.
        """
        def pick(value, base_attr, default):
            if value is not None:
                return value
            if base is not None:
                return getattr(base, base_attr)
            return default

        data = {
            "ws_work_days": pick(schedule_input.work_days, "ws_work_days", list(settings.DEFAULT_WORK_DAYS)),
            "ws_start_time": pick(schedule_input.start_time, "ws_start_time", parse_clock(settings.DEFAULT_START_TIME)),
            "ws_end_time": pick(schedule_input.end_time, "ws_end_time", parse_clock(settings.DEFAULT_END_TIME)),
            "ws_grace_minutes": pick(schedule_input.grace_minutes, "ws_grace_minutes", settings.DEFAULT_GRACE_MINUTES),
            "ws_overtime_enabled": pick(schedule_input.overtime_enabled, "ws_overtime_enabled", True),
            "ws_effective_from": effective_from,
        }

        if data["ws_end_time"] <= data["ws_start_time"]:
            # Shifts crossing midnight are not supported
            raise BadRequestException("end_time must be after start_time")

        return data

    def prepare_replacement(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        schedule_input: ScheduleInput,
        today: date
    ) -> ScheduleReplacement:
        """
        Validate a schedule change and compute the new version without writing

        Without an explicit effective_from the new version starts today and the
        previous one is closed today (the resolver prefers the newer row). With
        an explicit effective_from the previous one is closed the day before.

        Raises:
            BadRequestException: effective_from does not come after the version it
                replaces, or an undated change while a future version is pending
        """
        current = self.schedule_repo.get_open_schedule(db, client_id, employee_id)

        if schedule_input.effective_from is not None:
            effective_from = schedule_input.effective_from
            close_on = effective_from - timedelta(days=1)
            if current is not None and effective_from <= current.ws_effective_from:
                raise BadRequestException(
                    f"effective_from must be after {current.ws_effective_from.isoformat()}"
                )
        else:
            if current is not None and current.ws_effective_from > today:
                raise BadRequestException(
                    f"A schedule starting {current.ws_effective_from.isoformat()} is pending; "
                    f"give an effective_from after that date"
                )
            effective_from = today
            close_on = today

        data = self.build_schedule_data(schedule_input, effective_from, base=current)
        return ScheduleReplacement(close_on if current is not None else None, data)

    def apply_replacement(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        replacement: ScheduleReplacement
    ) -> WorkSchedule:
        schedule = self.schedule_repo.replace_open_schedule(
            db, client_id, employee_id, replacement.close_on, replacement.data
        )

        logger.info(
            "Schedule version created",
            extra={'extra_data': {
                "client_id": client_id,
                "employee_id": employee_id,
                "ws_id": schedule.ws_id,
                "effective_from": schedule.ws_effective_from.isoformat()
            }}
        )
        return schedule

    def replace_schedule(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        schedule_input: ScheduleInput,
        today: date
    ) -> WorkSchedule:
        """Start a new schedule version and close the open-ended one"""
        replacement = self.prepare_replacement(db, client_id, employee_id, schedule_input, today)
        return self.apply_replacement(db, client_id, employee_id, replacement)
