from typing import Optional

from pydantic import Field

from ..models.base import CamelModel, DATE_PATTERN
from ..models.medical_record import MedicalRecordBase

class MedicalRecordCreate(MedicalRecordBase):
    record_id: Optional[str] = None

class MedicalRecordUpdate(CamelModel):
    patient_id: Optional[str] = Field(None, min_length=1)
    doctor_id: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    medications: Optional[str] = None
    notes: Optional[str] = None
