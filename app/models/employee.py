"""
Employee Model - HR employees who record attendance
"""
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base


class Employee(Base):
    """Employee model for hris schema - Table: hris.hr_employees"""
    __tablename__ = "hr_employees"
    __table_args__ = (
        UniqueConstraint("em_client_id", "em_username", name="uq_hr_employees_client_username"),
        {"schema": "hris"},
    )

    em_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    em_client_id = Column(Integer, nullable=False, index=True)  # Tenant
    em_full_name = Column(String(255), nullable=False)
    em_username = Column(String(100), nullable=False)
    em_password = Column(String(255), nullable=False)
    em_password_encoding = Column(String(10), nullable=False, default="hashed")  # 'plain' or 'hashed'
    em_phone = Column(String(50), nullable=True)
    em_email = Column(String(255), nullable=True)
    em_status = Column(String(10), nullable=False, default="active")  # 'active' or 'inactive'
    em_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    em_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
