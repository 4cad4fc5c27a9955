from datetime import datetime
from typing import Optional
import enum

from pydantic import ConfigDict, Field

from .base import CamelModel, DATE_PATTERN, TIME_PATTERN

class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CHECKING_IN = "checking-in"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"
    WAITING = "waiting"

class AppointmentBase(CamelModel):
    # References by business key, not checked against the other collections
    patient_id: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)

    # Appointment details
    date: str = Field(..., pattern=DATE_PATTERN)
    time: str = Field(..., pattern=TIME_PATTERN)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None

class Appointment(AppointmentBase):
    model_config = ConfigDict(frozen=True)

    id: int
    appointment_id: str
    created_at: datetime
