"""Business logic for mechanics."""

import logging
from typing import Optional

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.core.exceptions import DuplicateKeyError, ReferenceNotFoundError
from mechanic_shop.app.schemas.mechanic import MechanicCreate, MechanicRead


logger = logging.getLogger(__name__)


class MechanicService:
    """Service for adding and looking up mechanics."""

    @classmethod
    def create_mechanic(cls, store: DataStore, data: MechanicCreate) -> MechanicRead:
        store.execute_update(
            "INSERT INTO Mechanic (id, fname, lname, experience) VALUES (?, ?, ?, ?)",
            (data.id, data.fname, data.lname, data.experience),
        )
        logger.info("Added mechanic %s (%s %s)", data.id, data.fname, data.lname)
        return MechanicRead(**data.model_dump())

    @classmethod
    def exists(cls, store: DataStore, mechanic_id: int) -> bool:
        return store.execute_query("SELECT id FROM Mechanic WHERE id = ?", (mechanic_id,)) > 0

    @classmethod
    def ensure_exists(cls, store: DataStore, mechanic_id: int) -> None:
        if not cls.exists(store, mechanic_id):
            raise ReferenceNotFoundError("Mechanic", mechanic_id)

    @classmethod
    def ensure_absent(cls, store: DataStore, mechanic_id: int) -> None:
        if cls.exists(store, mechanic_id):
            raise DuplicateKeyError("Mechanic", mechanic_id)

    @classmethod
    def get_mechanic(cls, store: DataStore, mechanic_id: int) -> Optional[MechanicRead]:
        row = store.fetch_one(
            "SELECT id, fname, lname, experience FROM Mechanic WHERE id = ?",
            (mechanic_id,),
        )
        return MechanicRead(**dict(row)) if row else None
