"""
Business logic for customers.

Customers are added once and never modified by the shop.  Besides the
insert, the service offers the existence checks other operations run
before they reference a customer.
"""

import logging
from typing import Optional

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.core.exceptions import DuplicateKeyError, ReferenceNotFoundError
from mechanic_shop.app.schemas.customer import CustomerCreate, CustomerRead


logger = logging.getLogger(__name__)


class CustomerService:
    """Service for adding and looking up customers."""

    @classmethod
    def create_customer(cls, store: DataStore, data: CustomerCreate) -> CustomerRead:
        """Insert a customer and return it as stored."""
        store.execute_update(
            "INSERT INTO Customer (id, fname, lname, phone, address) VALUES (?, ?, ?, ?, ?)",
            (data.id, data.fname, data.lname, data.phone, data.address),
        )
        logger.info("Added customer %s (%s %s)", data.id, data.fname, data.lname)
        return CustomerRead(**data.model_dump())

    @classmethod
    def exists(cls, store: DataStore, customer_id: int) -> bool:
        return store.execute_query("SELECT id FROM Customer WHERE id = ?", (customer_id,)) > 0

    @classmethod
    def ensure_exists(cls, store: DataStore, customer_id: int) -> None:
        if not cls.exists(store, customer_id):
            raise ReferenceNotFoundError("Customer", customer_id)

    @classmethod
    def ensure_absent(cls, store: DataStore, customer_id: int) -> None:
        if cls.exists(store, customer_id):
            raise DuplicateKeyError("Customer", customer_id)

    @classmethod
    def get_customer(cls, store: DataStore, customer_id: int) -> Optional[CustomerRead]:
        result = store.fetch_one(
            "SELECT id, fname, lname, phone, address FROM Customer WHERE id = ?",
            (customer_id,),
        )
        return CustomerRead(**dict(result)) if result else None
