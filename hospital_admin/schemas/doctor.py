from typing import Any, Optional

from pydantic import Field

from ..models.base import CamelModel
from ..models.doctor import DoctorBase

class DoctorCreate(DoctorBase):
    doctor_id: Optional[str] = None

class DoctorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    specialization: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    availability: Optional[Any] = None
