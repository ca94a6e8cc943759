"""
Business logic for service requests and their closure.

A service request is *open* while no row in ``Closed_Request``
references it and *closed* once one does.  Closing is the only
transition and it happens at most once per request:

1. the request id must name an existing, still open request;
2. the mechanic id must name an existing mechanic;
3. the work order is inserted with the current date, the comment and
   the bill.

The work order id comes from the ``Closed_Request`` AUTOINCREMENT
sequence.  Insert and sequence read share one ``BEGIN IMMEDIATE``
transaction, so concurrent shops on the same database never hand out
the same id.  With N work orders already written the next one gets
N + 1.
"""

import logging
from datetime import date
from typing import Optional

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.core.exceptions import (
    DuplicateKeyError,
    ReferenceNotFoundError,
    RequestAlreadyClosedError,
)
from mechanic_shop.app.schemas.service_request import (
    ClosedRequestCreate,
    ClosedRequestRead,
    ServiceRequestCreate,
    ServiceRequestRead,
)
from mechanic_shop.app.services.car_service import CarService
from mechanic_shop.app.services.customer_service import CustomerService
from mechanic_shop.app.services.mechanic_service import MechanicService


logger = logging.getLogger(__name__)


class ServiceRequestService:
    """Service for opening and closing service requests."""

    @classmethod
    def exists(cls, store: DataStore, rid: int) -> bool:
        return store.execute_query("SELECT rid FROM Service_Request WHERE rid = ?", (rid,)) > 0

    @classmethod
    def is_closed(cls, store: DataStore, rid: int) -> bool:
        return store.execute_query("SELECT wid FROM Closed_Request WHERE rid = ?", (rid,)) > 0

    @classmethod
    def ensure_absent(cls, store: DataStore, rid: int) -> None:
        if cls.exists(store, rid):
            raise DuplicateKeyError("Service request", rid)

    @classmethod
    def ensure_open(cls, store: DataStore, rid: int) -> None:
        """Raise unless ``rid`` names a request that has not been closed yet."""
        if not cls.exists(store, rid):
            raise ReferenceNotFoundError("Service request", rid)
        if cls.is_closed(store, rid):
            raise RequestAlreadyClosedError(rid)

    @classmethod
    def create_request(cls, store: DataStore, data: ServiceRequestCreate) -> ServiceRequestRead:
        """Open a new service request.

        The customer and the car are checked again here even though the
        prompts already did, because the insert must never reference a
        missing row.
        """
        CustomerService.ensure_exists(store, data.customer_id)
        CarService.ensure_exists(store, data.car_vin)
        store.execute_update(
            """
            INSERT INTO Service_Request (rid, customer_id, car_vin, date, odometer, complain)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (data.rid, data.customer_id, data.car_vin, data.date, data.odometer, data.complain),
        )
        logger.info("Opened service request %s for car %s", data.rid, data.car_vin)
        return ServiceRequestRead(**data.model_dump())

    @classmethod
    def close_request(
        cls,
        store: DataStore,
        data: ClosedRequestCreate,
        closed_on: Optional[date] = None,
    ) -> ClosedRequestRead:
        """Close an open service request and return the new work order.

        Raises ``ReferenceNotFoundError`` (or its subclass
        ``RequestAlreadyClosedError``) before anything is written when
        the request or the mechanic does not qualify.
        """
        closed_on = closed_on or date.today()
        with store.transaction():
            cls.ensure_open(store, data.rid)
            MechanicService.ensure_exists(store, data.mid)
            store.execute_update(
                "INSERT INTO Closed_Request (rid, mid, date, comment, bill) VALUES (?, ?, ?, ?, ?)",
                (data.rid, data.mid, closed_on.isoformat(), data.comment, data.bill),
            )
            wid = store.current_sequence_value("Closed_Request")
        logger.info("Closed service request %s as work order %s (bill %s)", data.rid, wid, data.bill)
        return ClosedRequestRead(
            wid=wid,
            rid=data.rid,
            mid=data.mid,
            date=closed_on.isoformat(),
            comment=data.comment,
            bill=data.bill,
        )

    @classmethod
    def next_work_order_id(cls, store: DataStore) -> int:
        """Return the id the next work order will receive."""
        return max(store.current_sequence_value("Closed_Request"), 0) + 1

    @classmethod
    def get_request(cls, store: DataStore, rid: int) -> Optional[ServiceRequestRead]:
        row = store.fetch_one(
            "SELECT rid, customer_id, car_vin, date, odometer, complain FROM Service_Request WHERE rid = ?",
            (rid,),
        )
        return ServiceRequestRead(**dict(row)) if row else None

    @classmethod
    def get_closed_request(cls, store: DataStore, rid: int) -> Optional[ClosedRequestRead]:
        """Return the work order that closed ``rid``, if any."""
        row = store.fetch_one(
            "SELECT wid, rid, mid, date, comment, bill FROM Closed_Request WHERE rid = ?",
            (rid,),
        )
        return ClosedRequestRead(**dict(row)) if row else None
