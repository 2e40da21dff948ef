# --- File: lodgebook/schemas/payment/payment_base.py ---
"""
Payment schemas.

This module defines the stored payment record and the commands that
create and correct it. Once recorded, only status, amount, date and notes
may change; the owner, type and month of a payment are fixed.
"""

from datetime import date as Date
from typing import Optional

from pydantic import Field, field_validator, model_validator

from lodgebook.schemas.common.base import (
    BaseCreateSchema,
    BaseSchema,
    BaseUpdateSchema,
    IdentifiedMixin,
)
from lodgebook.schemas.common.enums import PaymentStatus, PaymentType
from lodgebook.utils.date_utils import MONTH_KEY_PATTERN, coerce_date, month_key

__all__ = [
    "Payment",
    "PaymentCreate",
    "PaymentUpdate",
]


class Payment(BaseSchema, IdentifiedMixin):
    """Stored payment record."""

    resident_id: str = Field(..., min_length=1, description="Owning resident")
    amount: int = Field(..., ge=0, description="Amount in whole currency units")
    date: Date = Field(..., description="Date the payment was made or raised")
    payment_type: PaymentType = Field(..., alias="type", description="Type of payment")
    month: str = Field(..., pattern=MONTH_KEY_PATTERN, description="Billing month (YYYY-MM)")
    status: PaymentStatus = Field(..., description="Payment status")
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return coerce_date(v)

    @property
    def counts_as_revenue(self) -> bool:
        """Paid and not a refundable deposit."""
        return self.status is PaymentStatus.PAID and self.payment_type is not PaymentType.SECURITY


class PaymentCreate(BaseCreateSchema):
    """
    Record a payment.

    ``month`` defaults to the month of ``date`` when omitted.
    """

    resident_id: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)
    date: Date = Field(...)
    payment_type: PaymentType = Field(default=PaymentType.RENT, alias="type")
    month: Optional[str] = Field(default=None, pattern=MONTH_KEY_PATTERN)
    status: PaymentStatus = Field(default=PaymentStatus.PAID)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return coerce_date(v)

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def default_month(self) -> "PaymentCreate":
        if self.month is None:
            # object.__setattr__ skips validate_assignment recursion
            object.__setattr__(self, "month", month_key(self.date))
        return self


class PaymentUpdate(BaseUpdateSchema, IdentifiedMixin):
    """
    Correct an existing payment.

    Only the fields that are set are applied.
    """

    status: Optional[PaymentStatus] = Field(default=None)
    amount: Optional[int] = Field(default=None, ge=0)
    date: Optional[Date] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return coerce_date(v)
