# Models/__init__.py
from .base import Base
from .car import CarInventory
from .customer import Customer, PurchaseHistory

# List all models for easy access and database initialization
__all__ = [
    'Base',
    'CarInventory',
    'Customer',
    'PurchaseHistory',
]
