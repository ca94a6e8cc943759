"""
Business logic for cars and their ownership.

A car may be added on its own or together with its owner.  In the
latter case the ``Car`` and ``Owns`` rows are written in a single
transaction so a car never appears half-registered.
"""

import logging
from typing import List, Optional

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.core.exceptions import DuplicateKeyError, ReferenceNotFoundError
from mechanic_shop.app.schemas.car import CarCreate, CarRead


logger = logging.getLogger(__name__)


class CarService:
    """Service for adding and looking up cars."""

    @classmethod
    def create_car(cls, store: DataStore, data: CarCreate) -> CarRead:
        """Insert a car and, when ``owner_id`` is set, its ownership record.

        The owner must already exist; the caller is expected to have
        checked it with ``CustomerService.ensure_exists``.
        """
        with store.transaction():
            store.execute_update(
                "INSERT INTO Car (vin, make, model, year) VALUES (?, ?, ?, ?)",
                (data.vin, data.make, data.model, data.year),
            )
            if data.owner_id is not None:
                store.execute_update(
                    "INSERT INTO Owns (customer_id, car_vin) VALUES (?, ?)",
                    (data.owner_id, data.vin),
                )
        logger.info("Added car %s (%s %s %s), owner %s", data.vin, data.year, data.make, data.model, data.owner_id)
        return CarRead(vin=data.vin, make=data.make, model=data.model, year=data.year)

    @classmethod
    def exists(cls, store: DataStore, vin: str) -> bool:
        return store.execute_query("SELECT vin FROM Car WHERE vin = ?", (vin,)) > 0

    @classmethod
    def ensure_exists(cls, store: DataStore, vin: str) -> None:
        if not cls.exists(store, vin):
            raise ReferenceNotFoundError("Car", vin)

    @classmethod
    def ensure_absent(cls, store: DataStore, vin: str) -> None:
        if cls.exists(store, vin):
            raise DuplicateKeyError("Car", vin)

    @classmethod
    def get_car(cls, store: DataStore, vin: str) -> Optional[CarRead]:
        row = store.fetch_one(
            "SELECT vin, make, model, year FROM Car WHERE vin = ?",
            (vin,),
        )
        return CarRead(**dict(row)) if row else None

    @classmethod
    def list_owned_vins(cls, store: DataStore, customer_id: int) -> List[str]:
        """Return the VINs recorded as owned by ``customer_id``."""
        result = store.execute_query_and_return_result(
            "SELECT car_vin FROM Owns WHERE customer_id = ? ORDER BY ownership_id",
            (customer_id,),
        )
        return [row[0] for row in result.rows]
