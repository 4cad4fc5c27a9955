from typing import Optional

from pydantic import Field

from ..models.appointment import AppointmentBase, AppointmentStatus
from ..models.base import CamelModel, DATE_PATTERN, TIME_PATTERN

class AppointmentCreate(AppointmentBase):
    appointment_id: Optional[str] = None

class AppointmentUpdate(CamelModel):
    patient_id: Optional[str] = Field(None, min_length=1)
    doctor_id: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None
