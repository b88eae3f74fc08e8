# Models/enums.py
"""
Closed vocabularies for car records.

These enums are the only definition of the allowed values: request
validation and the database columns both read from here.
"""
import enum
from typing import List, Type


class FuelType(str, enum.Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    LPG = "LPG"
    CNG = "CNG"


class RegisteredIn(str, enum.Enum):
    UNREGISTERED = "Un-Registered"
    BALOCHISTAN = "Balochistan"
    ISLAMABAD = "Islamabad"
    KPK = "KPK"
    PUNJAB = "Punjab"
    SINDH = "Sindh"


class TransmissionType(str, enum.Enum):
    AUTOMATIC = "Automatic"
    MANUAL = "Manual"


class TaxHistory(str, enum.Enum):
    TOKEN_PAID = "Token/Tax Paid"
    TOKEN_REMAINING = "Token Remaining"
    LIFETIME_TOKEN_PAID = "Lifetime Token Paid"


class Assembly(str, enum.Enum):
    LOCAL = "Local"
    IMPORTED = "Imported"


class Document(str, enum.Enum):
    ORIGINAL_BOOK = "Original Book"
    AUCTION_SHEET = "Auction Sheet Available"
    DUPLICATE_BOOK = "Duplicate Book"
    DUPLICATE_NUMBER_PLATE = "Duplicate Number Plate"
    FRESH_IMPORT = "Fresh Import"
    COMPLETE_ORIGINAL_FILE = "Complete Original File"
    DUPLICATE_FILE = "Duplicate File"


def values(enum_cls: Type[enum.Enum]) -> List[str]:
    return [member.value for member in enum_cls]
