from typing import Optional

from pydantic import Field

from ..models.base import CamelModel
from ..models.patient import PatientBase

class PatientCreate(PatientBase):
    # Generated as PT... when omitted
    patient_id: Optional[str] = None

class PatientUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
