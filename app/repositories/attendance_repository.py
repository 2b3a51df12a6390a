"""
Attendance Repository - Data access layer for daily attendance records
"""
from typing import Optional, List, Tuple, Dict, Any
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from app.models.attendance_record import AttendanceRecord
from app.models.employee import Employee


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    def __init__(self):
        super().__init__(AttendanceRecord)

    def get_for_date(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        work_date: date
    ) -> Optional[AttendanceRecord]:
        return db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_client_id == client_id,
            AttendanceRecord.ar_employee_id == employee_id,
            AttendanceRecord.ar_work_date == work_date
        ).first()

    def insert_check_in(self, db: Session, record_data: Dict[str, Any]) -> Optional[AttendanceRecord]:
        """
        Insert the day's record.
        Returns None if a record for (employee, work_date) already exists.
        """
        try:
            record = AttendanceRecord(**record_data)
            db.add(record)
            db.commit()
        except IntegrityError:
            # Lost the race to another check-in for the same day
            db.rollback()
            return None

        db.refresh(record)
        return record

    def close_check_out(
        self,
        db: Session,
        client_id: int,
        record_id: int,
        checkout_data: Dict[str, Any]
    ) -> bool:
        """
        Write check-out fields only if the record is still open.
        Returns False when another request already checked out.
        """
        updated = db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_client_id == client_id,
            AttendanceRecord.ar_id == record_id,
            AttendanceRecord.ar_check_out.is_(None)
        ).update(checkout_data, synchronize_session=False)
        db.commit()
        return updated == 1

    def _filtered_query(
        self,
        db: Session,
        client_id: int,
        date_from: date = None,
        date_to: date = None,
        employee_id: int = None,
        status: str = None
    ):
        query = db.query(AttendanceRecord, Employee.em_full_name).join(
            Employee, Employee.em_id == AttendanceRecord.ar_employee_id
        ).filter(AttendanceRecord.ar_client_id == client_id)

        if date_from:
            query = query.filter(AttendanceRecord.ar_work_date >= date_from)
        if date_to:
            query = query.filter(AttendanceRecord.ar_work_date <= date_to)
        if employee_id:
            query = query.filter(AttendanceRecord.ar_employee_id == employee_id)
        if status:
            query = query.filter(AttendanceRecord.ar_status == status)

        return query

    def get_records_with_filters(
        self,
        db: Session,
        client_id: int,
        date_from: date = None,
        date_to: date = None,
        employee_id: int = None,
        status: str = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Tuple[AttendanceRecord, str]]:
        """Tenant records joined with employee names, newest work date first"""
        query = self._filtered_query(db, client_id, date_from, date_to, employee_id, status)
        return query.order_by(
            AttendanceRecord.ar_work_date.desc(),
            AttendanceRecord.ar_id.desc()
        ).offset(skip).limit(limit).all()

    def count_records_with_filters(
        self,
        db: Session,
        client_id: int,
        date_from: date = None,
        date_to: date = None,
        employee_id: int = None,
        status: str = None
    ) -> int:
        return self._filtered_query(db, client_id, date_from, date_to, employee_id, status).count()

    def get_range(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        date_from: date,
        date_to: date
    ) -> List[AttendanceRecord]:
        """Employee records between two dates inclusive, oldest first"""
        return db.query(AttendanceRecord).filter(
            AttendanceRecord.ar_client_id == client_id,
            AttendanceRecord.ar_employee_id == employee_id,
            AttendanceRecord.ar_work_date >= date_from,
            AttendanceRecord.ar_work_date <= date_to
        ).order_by(AttendanceRecord.ar_work_date.asc()).all()
