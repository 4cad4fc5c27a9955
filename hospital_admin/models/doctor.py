from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field

from .base import CamelModel

class DoctorBase(CamelModel):
    name: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    department: Optional[str] = None

    # Contact information
    email: Optional[str] = None
    phone: Optional[str] = None

    # Free-form schedule data, stored as given
    availability: Optional[Any] = None

class Doctor(DoctorBase):
    model_config = ConfigDict(frozen=True)

    id: int
    doctor_id: str
    created_at: datetime
