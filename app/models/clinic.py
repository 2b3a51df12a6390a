"""
Clinic Model - Tenant clinics and their geofence configuration
"""
from sqlalchemy import Column, Integer, String, DateTime, Float
from sqlalchemy.sql import func
from atams.db import Base


class Clinic(Base):
    """Clinic model for hris schema - Table: hris.clinics"""
    __tablename__ = "clinics"
    __table_args__ = {"schema": "hris"}

    cl_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cl_client_id = Column(Integer, nullable=False, index=True)  # Tenant
    cl_name = Column(String(255), nullable=False)
    cl_latitude = Column(Float, nullable=True)
    cl_longitude = Column(Float, nullable=True)
    cl_allowed_radius_meters = Column(Integer, nullable=False, default=100)
    cl_location_updated_at = Column(DateTime(timezone=True), nullable=True)
    cl_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    cl_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
