from typing import Optional

from pydantic import Field

from ..models.base import CamelModel
from ..models.resource import HospitalResourceBase

class HospitalResourceCreate(HospitalResourceBase):
    pass

class HospitalResourceUpdate(CamelModel):
    resource_name: Optional[str] = Field(None, min_length=1)
    total_count: Optional[int] = Field(None, ge=0)
    used_count: Optional[int] = Field(None, ge=0)
