# --- File: lodgebook/schemas/common/base.py ---
"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "IdentifiedMixin",
    "BaseCreateSchema",
    "BaseUpdateSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Attribute names are snake_case; serialized names are camelCase, the
    shape snapshots are stored in. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Keep enums as Enum instances to retain full type information;
        # callers can still access `.value` if needed.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class IdentifiedMixin(BaseModel):
    """Mixin for the opaque string identifier."""

    id: str = Field(..., min_length=1, description="Unique identifier")


class BaseCreateSchema(BaseSchema):
    """Base schema for create commands."""
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for update commands.

    Note:
        This base class does not itself make fields optional. Subclasses
        intended for partial updates declare their fields as Optional.
    """
    pass
