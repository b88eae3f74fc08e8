# Stores/customers.py
"""
Customer store.

Owns the `customers` and `purchase_history` tables. CNIC is the business
key. The purchase history is a back-reference into the inventory by
chassis number; this store does not check those references, that is the
purchase coordinator's job.
"""
import logging
import re
import uuid
from typing import List, Optional

from sqlalchemy import exc, false
from sqlalchemy.orm import Session

from Models import Customer, PurchaseHistory
from Models.base import utcnow
from Schemas.customer import CustomerCreate, CustomerFields, PurchaseEntry
from Stores.inventory import Page, paginate, parse_uuid
from errors import Conflict, NotFound

logger = logging.getLogger(__name__)

CNIC_DIGITS = 13
CNIC_SEARCH = re.compile(r"[0-9]+")

SORT_FIELDS = {
    "createdAt": Customer.created_at,
    "updatedAt": Customer.updated_at,
}


class CustomerStore:
    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        page: int = 1,
        limit: int = 3,
    ) -> Page:
        query = self.db.query(Customer)
        # Only an all-digit term filters; anything else lists every customer
        if search and CNIC_SEARCH.fullmatch(search):
            if len(search) > CNIC_DIGITS:
                query = query.filter(false())
            else:
                query = query.filter(Customer.cnic == int(search))

        order_by = None
        column = SORT_FIELDS.get(sort_by)
        if column is not None:
            order_by = column.desc() if sort_order == "desc" else column.asc()

        result = paginate(query, order_by, page, limit)
        if not result.items:
            raise NotFound("Customers not found")
        return result

    def get(self, customer_id: str) -> Customer:
        customer = self.db.query(Customer).filter(Customer.id == parse_uuid(customer_id)).first()
        if customer is None:
            raise NotFound("Customer not found")
        return customer

    def find_by_cnic(self, cnic: int, exclude_id: Optional[str] = None) -> Optional[Customer]:
        query = self.db.query(Customer).filter(Customer.cnic == cnic)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        return query.first()

    def create(self, payload: CustomerCreate) -> Customer:
        if self.find_by_cnic(payload.cnic) is not None:
            raise Conflict("Customer with cnic already exists.")

        customer = Customer(
            id=str(uuid.uuid4()),
            name=payload.name,
            cnic=payload.cnic,
            address=payload.address,
            contact=payload.contact,
        )
        customer.purchase_history = self._history_rows(customer, payload.purchase_history)
        self.db.add(customer)
        self._flush("Customer with cnic already exists.")
        return customer

    def update(self, customer: Customer, payload: CustomerFields) -> Customer:
        update_data = payload.model_dump(exclude_unset=True)
        if "cnic" in update_data and update_data["cnic"] != customer.cnic:
            if self.find_by_cnic(update_data["cnic"], exclude_id=customer.id) is not None:
                raise Conflict("Cnic already exists")

        for field in ("name", "cnic", "address", "contact"):
            if field in update_data:
                setattr(customer, field, update_data[field])
        if "purchase_history" in update_data:
            customer.purchase_history = self._history_rows(customer, payload.purchase_history)
        customer.updated_at = utcnow()

        self._flush("Cnic already exists")
        return customer

    def delete(self, customer: Customer) -> List[str]:
        """Remove the customer; returns the chassis numbers it had purchased."""
        chasis_nos = [entry.chasis_no for entry in customer.purchase_history]
        self.db.delete(customer)
        self.db.flush()
        return chasis_nos

    def _history_rows(self, customer: Customer, entries: List[PurchaseEntry]) -> List[PurchaseHistory]:
        # Rows for chassis numbers already on record are reused: replacing them
        # would insert the new row before deleting the old one and trip the
        # per-customer unique constraint.
        existing = {row.chasis_no: row for row in customer.purchase_history}
        rows = []
        for position, entry in enumerate(entries):
            row = existing.get(entry.chasis_no)
            if row is None:
                row = PurchaseHistory(chasis_no=entry.chasis_no)
            row.purchase_date = entry.purchase_date
            row.position = position
            rows.append(row)
        return rows

    def _flush(self, conflict_message: str) -> None:
        try:
            self.db.flush()
        except exc.IntegrityError as e:
            self.db.rollback()
            logger.warning("Integrity error on customers: %s", e.orig)
            raise Conflict(conflict_message)
