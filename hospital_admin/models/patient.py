from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from .base import CamelModel

class PatientBase(CamelModel):
    # Personal information
    name: str = Field(..., min_length=1)
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None

    # Contact information
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None

    # Medical information
    blood_type: Optional[str] = None
    allergies: Optional[str] = None

class Patient(PatientBase):
    model_config = ConfigDict(frozen=True)

    id: int
    patient_id: str
    created_at: datetime
