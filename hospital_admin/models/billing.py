from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import enum

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel, DATE_PATTERN

class BillingStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIALLY_PAID = "partially-paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

def normalize_amount(value: Any) -> Any:
    """Amounts are kept as decimal strings; numbers are converted."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        try:
            if not Decimal(value).is_finite():
                raise ValueError("amount must be a finite decimal number")
        except InvalidOperation:
            raise ValueError("amount must be a decimal number")
    return value

class BillingBase(CamelModel):
    patient_id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    description: str = Field(..., min_length=1)
    amount: str
    status: BillingStatus = BillingStatus.PENDING

    # Payment details
    payment_method: Optional[str] = None
    insurance_info: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, value):
        return normalize_amount(value)

class Billing(BillingBase):
    model_config = ConfigDict(frozen=True)

    id: int
    billing_id: str
    created_at: datetime
