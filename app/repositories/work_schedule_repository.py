"""
Work Schedule Repository - Versioned schedule lookup and replacement
"""
from typing import Optional, Dict, Any
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import or_

from atams.db import BaseRepository
from atams.transaction import transaction
from app.models.work_schedule import WorkSchedule


class WorkScheduleRepository(BaseRepository[WorkSchedule]):
    def __init__(self):
        super().__init__(WorkSchedule)

    def resolve_for_date(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        target_date: date
    ) -> Optional[WorkSchedule]:
        """
        Schedule effective on target_date

        Latest effective_from wins; among equal dates the most recently
        inserted row wins. None means the employee has no schedule that day.
        """
        return db.query(WorkSchedule).filter(
            WorkSchedule.ws_client_id == client_id,
            WorkSchedule.ws_employee_id == employee_id,
            WorkSchedule.ws_effective_from <= target_date,
            or_(
                WorkSchedule.ws_effective_to.is_(None),
                WorkSchedule.ws_effective_to >= target_date
            )
        ).order_by(
            WorkSchedule.ws_effective_from.desc(),
            WorkSchedule.ws_id.desc()
        ).first()

    def get_open_schedule(self, db: Session, client_id: int, employee_id: int) -> Optional[WorkSchedule]:
        """The schedule version without an end date, if any"""
        return db.query(WorkSchedule).filter(
            WorkSchedule.ws_client_id == client_id,
            WorkSchedule.ws_employee_id == employee_id,
            WorkSchedule.ws_effective_to.is_(None)
        ).order_by(
            WorkSchedule.ws_effective_from.desc(),
            WorkSchedule.ws_id.desc()
        ).first()

    def replace_open_schedule(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        close_on: Optional[date],
        schedule_data: Dict[str, Any]
    ) -> WorkSchedule:
        """
        Close the open-ended version on close_on and insert the new one, in one transaction
        """
        with transaction(db):
            if close_on is not None:
                db.query(WorkSchedule).filter(
                    WorkSchedule.ws_client_id == client_id,
                    WorkSchedule.ws_employee_id == employee_id,
                    WorkSchedule.ws_effective_to.is_(None)
                ).update({WorkSchedule.ws_effective_to: close_on}, synchronize_session=False)

            schedule = WorkSchedule(
                ws_client_id=client_id,
                ws_employee_id=employee_id,
                **schedule_data
            )
            db.add(schedule)

        db.refresh(schedule)
        return schedule
