# Schemas/car.py
"""
Request and response schemas for car inventory records.

`CarPayload` is the request-level validator for inventory writes. Every
field is checked independently and all failures are reported together;
the messages are meant to be shown to the person filling in the form.
Multipart forms send everything as text, so numbers arrive as strings
and are converted here.
"""
from datetime import datetime
from typing import Any, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from Models.enums import Assembly, Document, FuelType, RegisteredIn, TaxHistory, TransmissionType
from errors import ValidationError

MIN_MODEL_YEAR = 1923
PRICE_RANGE = (50_000, 100_000_000)
MILEAGE_RANGE = (100, 1_000_000)


def current_year() -> int:
    return datetime.now().year


def _fail(message: str):
    raise PydanticCustomError("invalid_field", message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required_string(value: Any, label: str, min_length: int = 1, max_length: Optional[int] = None) -> str:
    if _is_blank(value) or not isinstance(value, str):
        _fail(f"{label} is required")
    value = value.strip()
    if len(value) < min_length or (max_length is not None and len(value) > max_length):
        _fail(f"{label} can be between {min_length} and {max_length} characters")
    return value


def bounded_int(value: Any, label: str, low: int, high: int, message: str) -> int:
    if _is_blank(value):
        _fail(f"{label} is required")
    if isinstance(value, bool):
        _fail(message)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            _fail(message)
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not low <= value <= high:
        _fail(message)
    return value


def choice(value: Any, enum_cls: Type, label: str):
    if _is_blank(value):
        _fail(f"Please select {label}")
    try:
        return enum_cls(value.strip() if isinstance(value, str) else value)
    except ValueError:
        _fail(f"Please provide valid {label}")


class CarPayload(BaseModel):
    """Fields a client may write on a car record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore',
                              protected_namespaces=())

    chasis_no: str = Field(None, validate_default=True)
    engine_no: str = Field(None, validate_default=True)
    make: str = Field(None, validate_default=True)
    model_name: str = Field(None, validate_default=True)
    variant: str = Field(None, validate_default=True)
    price: int = Field(None, validate_default=True)
    model_year: int = Field(None, validate_default=True)
    fuel_type: FuelType = Field(None, validate_default=True)
    # registered_in must stay above registration_no: the conditional rule reads it
    registered_in: RegisteredIn = Field(None, validate_default=True)
    registration_no: Optional[str] = Field(None, validate_default=True)
    mileage: int = Field(None, validate_default=True)
    transmission_type: TransmissionType = Field(None, validate_default=True)
    tax_history: TaxHistory = Field(None, validate_default=True)
    assembly: Assembly = Field(None, validate_default=True)
    document: List[Document] = Field(None, validate_default=True)

    @field_validator('chasis_no', mode='before')
    @classmethod
    def check_chasis_no(cls, value):
        return required_string(value, "Chasis No", 2, 20)

    @field_validator('engine_no', mode='before')
    @classmethod
    def check_engine_no(cls, value):
        return required_string(value, "Engine No", 2, 20)

    @field_validator('make', mode='before')
    @classmethod
    def check_make(cls, value):
        return required_string(value, "Make", 2, 20)

    @field_validator('model_name', mode='before')
    @classmethod
    def check_model_name(cls, value):
        return required_string(value, "Model Name", 2, 20)

    @field_validator('variant', mode='before')
    @classmethod
    def check_variant(cls, value):
        return required_string(value, "Variant")

    @field_validator('price', mode='before')
    @classmethod
    def check_price(cls, value):
        return bounded_int(value, "Price", *PRICE_RANGE,
                           "Enter valid Price, must be between 50,000 and 10 Crore")

    @field_validator('model_year', mode='before')
    @classmethod
    def check_model_year(cls, value):
        year = current_year()
        return bounded_int(value, "Model Year", MIN_MODEL_YEAR, year,
                           f"Enter valid Model Year, must be between {MIN_MODEL_YEAR} and {year}")

    @field_validator('mileage', mode='before')
    @classmethod
    def check_mileage(cls, value):
        return bounded_int(value, "Mileage", *MILEAGE_RANGE,
                           "Enter valid Mileage, must be between 100 and 1000000")

    @field_validator('fuel_type', mode='before')
    @classmethod
    def check_fuel_type(cls, value):
        return choice(value, FuelType, "Fuel Type")

    @field_validator('registered_in', mode='before')
    @classmethod
    def check_registered_in(cls, value):
        return choice(value, RegisteredIn, "Registered In")

    @field_validator('transmission_type', mode='before')
    @classmethod
    def check_transmission_type(cls, value):
        return choice(value, TransmissionType, "Transmission Type")

    @field_validator('tax_history', mode='before')
    @classmethod
    def check_tax_history(cls, value):
        return choice(value, TaxHistory, "Tax History")

    @field_validator('assembly', mode='before')
    @classmethod
    def check_assembly(cls, value):
        return choice(value, Assembly, "Assembly")

    @field_validator('document', mode='before')
    @classmethod
    def check_document(cls, value):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not value:
            _fail("Select at least one option")
        try:
            return [Document(item) for item in value]
        except ValueError:
            _fail("Please provide valid Document")

    @field_validator('registration_no', mode='before')
    @classmethod
    def check_registration_no(cls, value, info: ValidationInfo):
        # Only an unregistered car may omit its registration number. An invalid
        # or missing registeredIn counts as registered.
        registered_in = info.data.get('registered_in')
        if _is_blank(value):
            if registered_in == RegisteredIn.UNREGISTERED:
                return None
            _fail("Registration No is required")
        if not isinstance(value, str):
            _fail("Registration No is required")
        return value.strip()


class CarResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True,
                              protected_namespaces=())

    id: str
    chasis_no: str
    engine_no: str
    make: str
    model_name: str
    variant: str
    price: int
    model_year: int
    mileage: int
    fuel_type: FuelType
    registered_in: RegisteredIn
    registration_no: Optional[str] = None
    transmission_type: TransmissionType
    tax_history: TaxHistory
    assembly: Assembly
    document: List[Document]
    image: str
    is_sold: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


def validate_car_payload(raw: dict) -> CarPayload:
    """Run every field check on a raw inventory write; raise with all failures."""
    try:
        return CarPayload.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError([err["msg"] for err in e.errors()])
