# Models/customer.py
from sqlalchemy import Column, String, DateTime, BigInteger, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class Customer(Base):
    __tablename__ = 'customers'

    # Primary identifiers
    id = Column(String, primary_key=True, index=True)
    cnic = Column(BigInteger, unique=True, nullable=False, index=True)

    # Personal information
    name = Column(String(20), nullable=False)
    address = Column(String, nullable=False)
    contact = Column(String(11), nullable=False)

    # Cars bought, in the order they were recorded
    purchase_history = relationship(
        "PurchaseHistory",
        back_populates="customer",
        order_by="PurchaseHistory.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Customer {self.name} ({self.cnic})>"


class PurchaseHistory(Base):
    __tablename__ = 'purchase_history'
    __table_args__ = (
        UniqueConstraint('customer_id', 'chasis_no', name='uq_purchase_history_customer_chasis'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(String, ForeignKey('customers.id', ondelete='CASCADE'), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    chasis_no = Column(String(20), nullable=False, index=True)
    purchase_date = Column(DateTime, nullable=False, default=utcnow)

    customer = relationship("Customer", back_populates="purchase_history")

    def __repr__(self):
        return f"<PurchaseHistory {self.chasis_no} ({self.purchase_date})>"
