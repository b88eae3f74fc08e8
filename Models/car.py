# Models/car.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Enum
from .base import Base, utcnow
from .enums import FuelType, RegisteredIn, TransmissionType, TaxHistory, Assembly, values


def _enum_column(enum_cls, **kwargs):
    # Persist the human-readable value ("Un-Registered"), not the member name
    return Column(
        Enum(enum_cls, values_callable=values, native_enum=False, validate_strings=True,
             length=32),
        **kwargs,
    )


class CarInventory(Base):
    __tablename__ = 'cars'

    # Primary identifiers
    id = Column(String, primary_key=True, index=True)
    chasis_no = Column(String(20), unique=True, nullable=False, index=True)
    engine_no = Column(String(20), nullable=False, index=True)

    # Car details
    make = Column(String(20), nullable=False, index=True)
    model_name = Column(String(20), nullable=False, index=True)
    variant = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
    model_year = Column(Integer, nullable=False)
    mileage = Column(Integer, nullable=False)

    # Categories
    fuel_type = _enum_column(FuelType, nullable=False, default=FuelType.PETROL)
    registered_in = _enum_column(RegisteredIn, nullable=False, default=RegisteredIn.PUNJAB)
    registration_no = Column(String, nullable=True, index=True)
    transmission_type = _enum_column(TransmissionType, nullable=False)
    tax_history = _enum_column(TaxHistory, nullable=False, default=TaxHistory.TOKEN_PAID)
    assembly = _enum_column(Assembly, nullable=False, default=Assembly.LOCAL)
    document = Column(JSON, nullable=False, default=list)

    # Stored upload filename
    image = Column(String, nullable=False)

    # Status
    is_sold = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<CarInventory {self.make} {self.model_name} ({self.chasis_no})>"
