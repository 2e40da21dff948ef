# --- File: lodgebook/schemas/resident/resident_base.py ---
"""
Resident schemas.

``Resident`` is the stored record. ``ResidentCreate`` is the onboarding
command and carries the form rules (10 digit contact number, leaving date
not before joining date). ``ResidentUpdate`` replaces a stored record and
only re-checks the leaving date, so records written by older versions
with free-form contact numbers stay editable.
"""

from __future__ import annotations

import re
from datetime import date as Date
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator

from lodgebook.schemas.common.base import (
    BaseCreateSchema,
    BaseSchema,
    IdentifiedMixin,
)
from lodgebook.schemas.common.enums import MessSubscription, ResidentStatus
from lodgebook.utils.date_utils import coerce_date

__all__ = [
    "ResidentBase",
    "Resident",
    "ResidentCreate",
    "ResidentUpdate",
]

_CONTACT_RE = re.compile(r"^\d{10}$")


class ResidentBase(BaseSchema):
    """Fields shared by the stored resident and its commands."""

    name: str = Field(..., min_length=1, max_length=120, description="Full name")
    contact_number: str = Field(..., min_length=1, description="Contact phone number")
    home_address: str = Field(..., min_length=1, description="Permanent home address")
    room_number: str = Field(..., min_length=1, description="Assigned room number")
    rent_amount: int = Field(..., gt=0, description="Monthly rent")
    payment_day: int = Field(
        ...,
        ge=1,
        le=31,
        alias="paymentDate",
        description="Day of the month rent falls due",
    )
    security_deposit: int = Field(default=0, ge=0, description="Refundable deposit")
    joining_date: Date = Field(..., description="Date the resident moved in")
    expected_leaving_date: Optional[Date] = Field(
        default=None,
        description="Planned move-out date",
    )
    mess_subscription: MessSubscription = Field(
        default=MessSubscription.SUBSCRIBED,
        description="Meal plan subscription",
    )

    @field_validator("joining_date", "expected_leaving_date", mode="before")
    @classmethod
    def normalize_dates(cls, v):
        return coerce_date(v)

    @property
    def is_mess_subscribed(self) -> bool:
        return self.mess_subscription is MessSubscription.SUBSCRIBED


class Resident(ResidentBase, IdentifiedMixin):
    """Stored resident record."""

    status: ResidentStatus = Field(default=ResidentStatus.ACTIVE)

    @property
    def is_active(self) -> bool:
        return self.status is ResidentStatus.ACTIVE


class _LeavingDateRule(BaseSchema):

    @field_validator("expected_leaving_date", check_fields=False)
    @classmethod
    def validate_leaving_date(cls, v: Optional[Date], info: ValidationInfo) -> Optional[Date]:
        joined = info.data.get("joining_date")
        if v is not None and joined is not None and v < joined:
            raise ValueError("Expected leaving date cannot be before the joining date")
        return v


class ResidentCreate(ResidentBase, _LeavingDateRule, BaseCreateSchema):
    """
    Onboarding command.

    ``status`` and ``id`` are assigned by the store.
    """

    @field_validator("contact_number")
    @classmethod
    def validate_contact_number(cls, v: str) -> str:
        if not _CONTACT_RE.match(v):
            raise ValueError("Contact number must be 10 digits")
        return v


class ResidentUpdate(ResidentBase, _LeavingDateRule, BaseCreateSchema, IdentifiedMixin):
    """
    Full replacement of a resident record.

    ``status`` is required so an edit never reactivates or deactivates
    a resident by omission.
    """

    status: ResidentStatus = Field(..., description="Active or inactive")

    def to_resident(self) -> Resident:
        return Resident.model_validate(self.model_dump())
