# lodgebook/services/common/mapping.py
"""
Command mapping utilities.

Store commands accept either the typed command schema or a plain
mapping. Both are funnelled through ``coerce_command`` so that invalid
input is reported as a single ``ValidationError`` keyed by field name.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lodgebook.core.exceptions import ValidationError

TSchema = TypeVar("TSchema", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def _field_names_by_alias(schema_cls: Type[BaseModel]) -> Dict[str, str]:
    names: Dict[str, str] = {}
    for name, info in schema_cls.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def field_errors_from(
    exc: PydanticValidationError,
    schema_cls: Type[BaseModel],
) -> Dict[str, List[str]]:
    """
    Collapse pydantic errors into ``{field_name: [messages]}``.

    Aliased locations ("rentAmount") are reported under the attribute
    name ("rent_amount"). Model level errors go under ``"__all__"``.
    """
    names = _field_names_by_alias(schema_cls)
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = names.get(str(loc[0]), str(loc[0])) if loc else "__all__"
        message = error.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        field_errors.setdefault(key, []).append(message)
    return field_errors


def coerce_command(
    schema_cls: Type[TSchema],
    data: Union[TSchema, BaseModel, Mapping[str, Any]],
) -> TSchema:
    """
    Validate ``data`` into ``schema_cls``.

    Args:
        schema_cls: Target command schema
        data: An instance of the schema, another model, or a mapping

    Returns:
        Validated command instance

    Raises:
        ValidationError: If any field is missing or invalid
    """
    if isinstance(data, schema_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema_cls.model_validate(data)
    except PydanticValidationError as exc:
        field_errors = field_errors_from(exc, schema_cls)
        fields = ", ".join(sorted(field_errors))
        raise ValidationError(
            f"Invalid {schema_cls.__name__}: {fields}",
            field_errors=field_errors,
        ) from exc
