from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from .base import CamelModel, DATE_PATTERN

class MedicalRecordBase(CamelModel):
    patient_id: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)

    # Clinical details
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    medications: Optional[str] = None
    notes: Optional[str] = None

class MedicalRecord(MedicalRecordBase):
    model_config = ConfigDict(frozen=True)

    id: int
    record_id: str
    created_at: datetime
