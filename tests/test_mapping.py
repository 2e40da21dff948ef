import pytest

from lodgebook.core.exceptions import ErrorCode, ValidationError
from lodgebook.schemas import PaymentCreate, ResidentCreate, RoomCreate
from lodgebook.services.common import coerce_command


def test_typed_command_passes_through():
    command = RoomCreate(room_number="301", capacity=2)
    assert coerce_command(RoomCreate, command) is command


def test_field_errors_use_attribute_names(resident_data):
    data = resident_data(contactNumber="abc", rentAmount=-5)
    with pytest.raises(ValidationError) as exc_info:
        coerce_command(ResidentCreate, data)

    error = exc_info.value
    assert error.error_code is ErrorCode.VALIDATION_ERROR
    assert error.field_errors["contact_number"] == ["Contact number must be 10 digits"]
    assert "rent_amount" in error.field_errors
    assert error.to_dict()["error"]["details"]["field_errors"] == error.field_errors


def test_non_mapping_input_is_reported():
    with pytest.raises(ValidationError) as exc_info:
        coerce_command(PaymentCreate, None)
    assert "__all__" in exc_info.value.field_errors
