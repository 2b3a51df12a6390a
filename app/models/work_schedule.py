"""
Work Schedule Model - Time-sliced schedule versions per employee
"""
from sqlalchemy import Column, Integer, Boolean, Date, Time, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class WorkSchedule(Base):
    """Work schedule model for hris schema - Table: hris.hr_work_schedules"""
    __tablename__ = "hr_work_schedules"
    __table_args__ = {"schema": "hris"}

    ws_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    ws_client_id = Column(Integer, nullable=False, index=True)
    ws_employee_id = Column(Integer, ForeignKey("hris.hr_employees.em_id"), nullable=False, index=True)
    ws_work_days = Column(JSON, nullable=False)  # ISO weekdays, e.g. [1, 2, 3, 4, 5]
    ws_start_time = Column(Time, nullable=False)
    ws_end_time = Column(Time, nullable=False)
    ws_grace_minutes = Column(Integer, nullable=False, default=10)
    ws_overtime_enabled = Column(Boolean, nullable=False, default=True)
    ws_effective_from = Column(Date, nullable=False)
    ws_effective_to = Column(Date, nullable=True)  # NULL = currently active
    ws_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
