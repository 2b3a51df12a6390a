"""
Attendance Record Model - One row per employee per work date
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Float, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base


class AttendanceRecord(Base):
    """Attendance record model for hris schema - Table: hris.hr_attendance"""
    __tablename__ = "hr_attendance"
    __table_args__ = (
        # Two concurrent check-ins for the same day cannot both insert
        UniqueConstraint("ar_employee_id", "ar_work_date", name="uq_hr_attendance_employee_date"),
        {"schema": "hris"},
    )

    ar_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    ar_client_id = Column(Integer, nullable=False, index=True)
    ar_employee_id = Column(Integer, ForeignKey("hris.hr_employees.em_id"), nullable=False, index=True)
    ar_work_date = Column(Date, nullable=False, index=True)
    ar_check_in = Column(DateTime(timezone=True), nullable=True)
    ar_check_in_lat = Column(Float, nullable=True)
    ar_check_in_lng = Column(Float, nullable=True)
    ar_check_out = Column(DateTime(timezone=True), nullable=True)
    ar_check_out_lat = Column(Float, nullable=True)
    ar_check_out_lng = Column(Float, nullable=True)
    ar_device_info = Column(String(512), nullable=True)
    ar_total_minutes = Column(Integer, nullable=True)
    ar_late_minutes = Column(Integer, nullable=True)
    ar_early_leave_minutes = Column(Integer, nullable=True)
    ar_overtime_minutes = Column(Integer, nullable=True)
    ar_status = Column(String(12), nullable=False, default="incomplete")  # weekend, incomplete, normal, late
    ar_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ar_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
