"""
Clinic Schemas for geofence configuration
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone


class ClinicLocation(BaseModel):
    """A clinic with a configured geofence"""
    model_config = ConfigDict(from_attributes=True)

    cl_id: int
    cl_name: str
    cl_latitude: float
    cl_longitude: float
    cl_allowed_radius_meters: int


class Clinic(BaseModel):
    """Clinic as listed to tenant users; location may be unset"""
    model_config = ConfigDict(from_attributes=True)

    cl_id: int
    cl_name: str
    cl_latitude: Optional[float] = None
    cl_longitude: Optional[float] = None
    cl_allowed_radius_meters: int
    cl_location_updated_at: Optional[datetime] = None

    @field_validator('cl_location_updated_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class ClinicLocationUpdate(BaseModel):
    """Request schema for PATCH /hr/clinic/location"""
    clinic_id: Optional[int] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    allowed_radius_meters: Optional[int] = Field(None, gt=0)
