# Services/purchase_coordinator.py
"""
Keeps customers' purchase histories and the inventory's sold flags in step.

A car goes Available -> Sold when a customer's purchase history first
references it. Nothing ever turns a sold car back to available: the only
way out of Sold is deletion, which happens when the owning customer is
deleted. Each operation runs in a single UnitOfWork, so a failure on any
entry leaves both tables exactly as they were.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from Models import Customer
from Schemas.customer import CustomerCreate, CustomerUpdate, PurchaseEntry
from Stores.unit_of_work import UnitOfWork
from errors import Conflict, EmptyPayloadError, NotFound

logger = logging.getLogger(__name__)


def _claim_cars(uow: UnitOfWork, entries: List[PurchaseEntry], allow_sold: bool) -> None:
    for entry in entries:
        car = uow.cars.find_by_chasis(entry.chasis_no)
        if car is None:
            raise NotFound(
                "Car with chasis No does not exists.",
                errors=entry.chasis_no,
            )
        if car.is_sold:
            if allow_sold:
                continue
            raise Conflict("Car with chasis No is already sold.", errors=entry.chasis_no)
        if not uow.cars.mark_sold(entry.chasis_no) and not allow_sold:
            # Another transaction sold it between our read and our write
            raise Conflict("Car with chasis No is already sold.", errors=entry.chasis_no)
        logger.info("Car %s marked as sold", entry.chasis_no)


def create_customer(db: Session, payload: CustomerCreate) -> Customer:
    """
    Create a customer and mark every car in its purchase history as sold.

    The customer row is written first and the cars are checked afterwards,
    all in one transaction: an unknown chassis number aborts with NotFound,
    a car that is already sold aborts with Conflict, and in both cases the
    customer is not kept.
    """
    with UnitOfWork(db) as uow:
        customer = uow.customers.create(payload)
        _claim_cars(uow, payload.purchase_history, allow_sold=False)
    db.refresh(customer)
    return customer


def update_customer(db: Session, customer_id: str, payload: CustomerUpdate) -> Customer:
    """
    Apply a partial update to a customer.

    Cars named in a new purchase history must exist. Unsold ones are marked
    sold; a car that is already sold is accepted as is, so re-sending a
    customer's current history is harmless.
    """
    with UnitOfWork(db) as uow:
        customer = uow.customers.get(customer_id)
        if not payload.model_fields_set:
            raise EmptyPayloadError()
        if "purchase_history" in payload.model_fields_set:
            _claim_cars(uow, payload.purchase_history, allow_sold=True)
        uow.customers.update(customer, payload)
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: str) -> List[str]:
    """
    Delete a customer together with every car in its purchase history.

    The cars are removed from the inventory, not returned to it. Returns
    the chassis numbers that were scrapped.
    """
    with UnitOfWork(db) as uow:
        customer = uow.customers.get(customer_id)
        chasis_nos = uow.customers.delete(customer)
        removed = uow.cars.delete_by_chasis(chasis_nos)
    if chasis_nos:
        logger.info("Customer %s deleted, %d car(s) removed from inventory: %s",
                    customer_id, removed, ", ".join(chasis_nos))
    return chasis_nos
