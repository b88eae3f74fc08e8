# Tests/test_car_validation.py
import pytest

from Models.enums import Document, RegisteredIn
from Schemas.car import current_year, validate_car_payload
from Tests.conftest import car_fields
from errors import ValidationError


def errors_for(**overrides):
    with pytest.raises(ValidationError) as excinfo:
        validate_car_payload(car_fields(**overrides))
    return excinfo.value.errors


def test_valid_form_is_converted():
    payload = validate_car_payload(car_fields())
    assert payload.chasis_no == "CN09187"
    assert payload.price == 100_000_000
    assert payload.model_year == 2024
    assert payload.document == [Document.ORIGINAL_BOOK, Document.FRESH_IMPORT]


def test_strings_are_trimmed():
    payload = validate_car_payload(car_fields(make="  Honda  "))
    assert payload.make == "Honda"


def test_all_failures_are_collected():
    errors = errors_for(chasisNo=None, price="10", fuelType="Steam", document=[])
    assert errors == [
        "Chasis No is required",
        "Enter valid Price, must be between 50,000 and 10 Crore",
        "Please provide valid Fuel Type",
        "Select at least one option",
    ]


def test_length_bounds():
    assert errors_for(engineNo="E") == ["Engine No can be between 2 and 20 characters"]
    assert errors_for(modelName="M" * 21) == ["Model Name can be between 2 and 20 characters"]


@pytest.mark.parametrize("field, value", [
    ("price", "49999"),
    ("price", "100000001"),
    ("mileage", "99"),
    ("mileage", "1000001"),
    ("modelYear", "1922"),
    ("price", "12.5"),
    ("mileage", "lots"),
])
def test_numeric_ranges(field, value):
    assert len(errors_for(**{field: value})) == 1


def test_model_year_cannot_be_in_the_future():
    errors = errors_for(modelYear=str(current_year() + 1))
    assert errors == [f"Enter valid Model Year, must be between 1923 and {current_year()}"]


def test_missing_select_field():
    assert errors_for(transmissionType=None) == ["Please select Transmission Type"]


def test_every_document_must_be_known():
    assert errors_for(document=["Original Book", "Photocopy"]) == ["Please provide valid Document"]


def test_single_document_value_is_accepted():
    payload = validate_car_payload(car_fields(document="Duplicate File"))
    assert payload.document == [Document.DUPLICATE_FILE]


def test_registration_number_optional_when_unregistered():
    payload = validate_car_payload(car_fields(registeredIn="Un-Registered", registrationNo=None))
    assert payload.registered_in == RegisteredIn.UNREGISTERED
    assert payload.registration_no is None


def test_registration_number_required_when_registered():
    assert errors_for(registeredIn="Sindh", registrationNo="") == ["Registration No is required"]


def test_registration_number_required_when_province_invalid():
    assert errors_for(registeredIn="Mars", registrationNo=None) == [
        "Please provide valid Registered In",
        "Registration No is required",
    ]


def test_client_cannot_set_sold_flag():
    payload = validate_car_payload(car_fields(isSold="true"))
    assert "is_sold" not in payload.model_dump()
