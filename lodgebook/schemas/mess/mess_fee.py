# --- File: lodgebook/schemas/mess/mess_fee.py ---
"""
Mess (meal plan) fee configuration.
"""

from pydantic import Field

from lodgebook.schemas.common.base import BaseSchema

__all__ = ["MessFeeConfig"]


class MessFeeConfig(BaseSchema):
    """Singleton mess fee settings."""

    monthly_rate: int = Field(..., ge=0, description="Monthly mess charge")
    is_active: bool = Field(default=True, description="Mess service offered")
