from datetime import datetime

from pydantic import ConfigDict, Field

from .base import CamelModel

class HospitalResourceBase(CamelModel):
    # e.g. "beds", "icu", "operating-rooms"; names are not required to be unique
    resource_name: str = Field(..., min_length=1)
    total_count: int = Field(..., ge=0)
    used_count: int = Field(..., ge=0)

class HospitalResource(HospitalResourceBase):
    model_config = ConfigDict(frozen=True)

    id: int
    last_updated: datetime
