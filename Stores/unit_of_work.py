# Stores/unit_of_work.py
"""
Unit of work spanning the inventory and customer stores.

Both stores share one session, so everything done inside a
`with UnitOfWork(db) as uow:` block commits together on a clean exit and
rolls back together when the block raises. Nothing is visible to other
sessions before the commit.
"""
import logging

from sqlalchemy import exc
from sqlalchemy.orm import Session

from Stores.customers import CustomerStore
from Stores.inventory import InventoryStore
from errors import Conflict

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, db: Session):
        self.db = db
        self.cars = InventoryStore(db)
        self.customers = CustomerStore(db)

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is not None:
            self.db.rollback()
            logger.debug("Transaction rolled back: %s", exc_value)
            return False
        try:
            self.db.commit()
        except exc.IntegrityError as e:
            self.db.rollback()
            logger.warning("Commit rejected by a constraint: %s", e.orig)
            raise Conflict("Write conflicts with an existing record")
        except Exception:
            self.db.rollback()
            raise
        return False
