# Schemas/customer.py
import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from Models.base import utcnow
from Schemas.car import required_string
from errors import ValidationError, format_validation_error


def _fail(message: str):
    raise PydanticCustomError("invalid_field", message)


class PurchaseEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    chasis_no: str = Field(None, validate_default=True)
    purchase_date: datetime = Field(default_factory=utcnow)

    @field_validator('chasis_no', mode='before')
    @classmethod
    def check_chasis_no(cls, value):
        if not isinstance(value, str) or not value.strip():
            _fail("Chasis No is required")
        value = value.strip()
        if len(value) < 2:
            _fail("Chasis No must be at least 2 characters")
        if len(value) > 20:
            _fail("Chasis No cannot exceed 20 characters")
        return value

    @field_validator('purchase_date', mode='before')
    @classmethod
    def default_purchase_date(cls, value):
        return utcnow() if value is None else value

    @field_validator('purchase_date', mode='after')
    @classmethod
    def as_naive_utc(cls, value: datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class CustomerFields(BaseModel):
    """
    Writable customer fields and their rules.

    Every field is optional here so the same rules serve partial updates;
    CustomerCreate makes them required.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    name: Optional[str] = None
    cnic: Optional[int] = None
    address: Optional[str] = None
    contact: Optional[str] = None
    purchase_history: Optional[List[PurchaseEntry]] = None

    @field_validator('name', mode='before')
    @classmethod
    def check_name(cls, value):
        if not isinstance(value, str) or not value.strip():
            _fail("Name is required")
        value = value.strip()
        if len(value) < 2:
            _fail("Name must be at least 2 characters")
        if len(value) > 20:
            _fail("Name cannot exceed 20 characters")
        return value

    @field_validator('cnic', mode='before')
    @classmethod
    def check_cnic(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            _fail("CNIC is required")
        text = value.strip() if isinstance(value, str) else str(value)
        if isinstance(value, bool) or not re.fullmatch(r"[0-9]{13}", text):
            _fail("CNIC must be 13 digits")
        return int(text)

    @field_validator('address', mode='before')
    @classmethod
    def check_address(cls, value):
        return required_string(value, "Address")

    @field_validator('contact', mode='before')
    @classmethod
    def check_contact(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            _fail("Contact is required")
        if not isinstance(value, str) or not re.fullmatch(r"[0-9]{11}", value.strip()):
            _fail("Contact must be 11 digits")
        return value.strip()

    @field_validator('purchase_history', mode='before')
    @classmethod
    def default_purchase_history(cls, value):
        return [] if value is None else value

    @field_validator('purchase_history', mode='after')
    @classmethod
    def check_unique_chasis(cls, value):
        chasis_nos = [entry.chasis_no for entry in value]
        if len(set(chasis_nos)) != len(chasis_nos):
            _fail("Each Chasis No must be unique within the purchase history")
        return value


class CustomerCreate(CustomerFields):
    name: str = Field(None, validate_default=True)
    cnic: int = Field(None, validate_default=True)
    address: str = Field(None, validate_default=True)
    contact: str = Field(None, validate_default=True)
    purchase_history: List[PurchaseEntry] = Field(None, validate_default=True)


class CustomerUpdate(CustomerFields):
    pass


def validate_customer_update(raw) -> CustomerUpdate:
    """Check a raw update body once the target customer is known to exist."""
    try:
        return CustomerUpdate.model_validate({} if raw is None else raw)
    except PydanticValidationError as e:
        raise ValidationError([format_validation_error(err) for err in e.errors()])


class CustomerResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    cnic: int
    address: str
    contact: str
    purchase_history: List[PurchaseEntry] = []
    created_at: datetime
    updated_at: Optional[datetime] = None
