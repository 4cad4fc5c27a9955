from typing import Optional

from pydantic import Field, field_validator

from ..models.base import CamelModel, DATE_PATTERN
from ..models.billing import BillingBase, BillingStatus, normalize_amount

class BillingCreate(BillingBase):
    billing_id: Optional[str] = None

class BillingUpdate(CamelModel):
    patient_id: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[str] = None
    status: Optional[BillingStatus] = None
    payment_method: Optional[str] = None
    insurance_info: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, value):
        return normalize_amount(value)
