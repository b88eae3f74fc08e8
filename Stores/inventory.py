# Stores/inventory.py
"""
Car inventory store.

Owns the `cars` table. The chassis number is the business key: unique,
and fixed once a car is created. Methods flush but never commit; the
surrounding UnitOfWork decides when a change becomes visible.
"""
import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from sqlalchemy import String, cast, exc, or_, update
from sqlalchemy.orm import Session

from Models import CarInventory
from Schemas.car import CarPayload
from errors import ChassisImmutableError, Conflict, InvalidIdentifier, NotFound, ValidationError

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    CarInventory.chasis_no,
    CarInventory.engine_no,
    CarInventory.registration_no,
    cast(CarInventory.registered_in, String),
    CarInventory.make,
    CarInventory.model_name,
)

SORT_FIELDS = {
    "mileage": CarInventory.mileage,
    "price": CarInventory.price,
    "modelYear": CarInventory.model_year,
    "createdAt": CarInventory.created_at,
    "updatedAt": CarInventory.updated_at,
}


@dataclass
class Page:
    """One page of a filtered, sorted listing."""
    items: List[Any]
    page: int
    limit: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit)


def parse_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise InvalidIdentifier()


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def paginate(query, order_by, page: int, limit: int) -> Page:
    total_items = query.order_by(None).count()
    if order_by is not None:
        query = query.order_by(order_by)
    items = query.offset((page - 1) * limit).limit(limit).all()
    return Page(items=items, page=page, limit=limit, total_items=total_items)


class InventoryStore:
    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        search: Optional[str] = None,
        is_sold: Optional[bool] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        page: int = 1,
        limit: int = 3,
    ) -> Page:
        query = self.db.query(CarInventory)
        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.filter(or_(*(field.ilike(pattern, escape="\\") for field in SEARCH_FIELDS)))
        if is_sold is not None:
            query = query.filter(CarInventory.is_sold == is_sold)

        order_by = None
        column = SORT_FIELDS.get(sort_by)
        if column is not None:
            order_by = column.desc() if sort_order == "desc" else column.asc()

        result = paginate(query, order_by, page, limit)
        if not result.items:
            raise NotFound("Cars not found")
        return result

    def get(self, car_id: str) -> CarInventory:
        car = self.db.query(CarInventory).filter(CarInventory.id == parse_uuid(car_id)).first()
        if car is None:
            raise NotFound("Car not found")
        return car

    def find_by_chasis(self, chasis_no: str) -> Optional[CarInventory]:
        return self.db.query(CarInventory).filter(CarInventory.chasis_no == chasis_no).first()

    def create(self, payload: CarPayload, image: Optional[str]) -> CarInventory:
        if self.find_by_chasis(payload.chasis_no) is not None:
            raise Conflict("Car with Chasis No already exists")
        if not image:
            raise ValidationError(["Image is required"])

        car = CarInventory(id=str(uuid.uuid4()), **payload.model_dump(mode="json"), image=image, is_sold=False)
        self.db.add(car)
        self._flush("Car with Chasis No already exists")
        return car

    def update(self, car_id: str, payload: CarPayload, image: Optional[str] = None) -> CarInventory:
        car = self.get(car_id)
        if payload.chasis_no != car.chasis_no:
            raise ChassisImmutableError()

        # Whole-record replace; the sold flag and identity are not client fields
        for field, value in payload.model_dump(mode="json").items():
            setattr(car, field, value)
        if image:
            car.image = image
        self._flush("Car update failed due to constraint violation")
        return car

    def delete(self, car_id: str) -> CarInventory:
        car = self.get(car_id)
        self.db.delete(car)
        self.db.flush()
        return car

    def mark_sold(self, chasis_no: str) -> bool:
        """
        Flip a car from available to sold.

        Compare-and-set on the sold flag: returns False when the car was
        already sold, including when a concurrent transaction sold it after
        this one read it.
        """
        result = self.db.execute(
            update(CarInventory)
            .where(CarInventory.chasis_no == chasis_no, CarInventory.is_sold.is_(False))
            .values(is_sold=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    def delete_by_chasis(self, chasis_nos: Iterable[str]) -> int:
        chasis_nos = list(chasis_nos)
        if not chasis_nos:
            return 0
        removed = 0
        for car in self.db.query(CarInventory).filter(CarInventory.chasis_no.in_(chasis_nos)).all():
            self.db.delete(car)
            removed += 1
        self.db.flush()
        return removed

    def _flush(self, conflict_message: str) -> None:
        try:
            self.db.flush()
        except exc.IntegrityError as e:
            self.db.rollback()
            logger.warning("Integrity error on cars: %s", e.orig)
            raise Conflict(conflict_message)
