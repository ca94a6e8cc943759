"""Opening and closing service requests."""

from datetime import date

import pytest

from mechanic_shop.app.core.exceptions import (
    DuplicateKeyError,
    ReferenceNotFoundError,
    RequestAlreadyClosedError,
)
from mechanic_shop.app.schemas.service_request import ClosedRequestCreate
from mechanic_shop.app.services.service_request_service import ServiceRequestService

from helpers import add_car, add_customer, add_mechanic, close_request, open_request


@pytest.fixture
def shop(store):
    add_customer(store, 1)
    add_car(store, "VIN0001", owner_id=1)
    add_mechanic(store, 7)
    return store


def closed_count(store):
    return store.execute_query("SELECT wid FROM Closed_Request")


def test_open_request_round_trip(shop):
    created = open_request(shop, 100, 1, "VIN0001", odometer=1234, date="2024-03-01")

    stored = ServiceRequestService.get_request(shop, 100)
    assert stored == created
    assert stored.odometer == 1234
    assert stored.date == "2024-03-01"
    assert ServiceRequestService.exists(shop, 100)
    assert not ServiceRequestService.is_closed(shop, 100)


def test_open_request_requires_customer_and_car(shop):
    with pytest.raises(ReferenceNotFoundError, match="Customer 2"):
        open_request(shop, 100, 2, "VIN0001")
    with pytest.raises(ReferenceNotFoundError, match="Car VIN9999"):
        open_request(shop, 100, 1, "VIN9999")
    assert not ServiceRequestService.exists(shop, 100)


def test_request_id_must_be_new(shop):
    open_request(shop, 100, 1, "VIN0001")
    with pytest.raises(DuplicateKeyError):
        ServiceRequestService.ensure_absent(shop, 100)


def test_close_request(shop):
    open_request(shop, 100, 1, "VIN0001")

    work_order = ServiceRequestService.close_request(
        shop,
        ClosedRequestCreate(rid=100, mid=7, comment="replaced belt", bill=180),
        closed_on=date(2024, 3, 2),
    )

    assert work_order.wid == 1
    assert work_order.date == "2024-03-02"
    assert ServiceRequestService.is_closed(shop, 100)
    assert ServiceRequestService.get_closed_request(shop, 100) == work_order


def test_close_defaults_to_today(shop):
    open_request(shop, 100, 1, "VIN0001")
    work_order = close_request(shop, 100, 7, 50)
    assert work_order.date == date.today().isoformat()


def test_unknown_request_is_rejected_before_insert(shop):
    with pytest.raises(ReferenceNotFoundError, match="Service request 555"):
        close_request(shop, 555, 7, 10)
    assert closed_count(shop) == 0


def test_unknown_mechanic_is_rejected_before_insert(shop):
    open_request(shop, 100, 1, "VIN0001")
    with pytest.raises(ReferenceNotFoundError, match="Mechanic 8"):
        close_request(shop, 100, 8, 10)
    assert closed_count(shop) == 0
    assert not ServiceRequestService.is_closed(shop, 100)


def test_request_can_only_be_closed_once(shop):
    open_request(shop, 100, 1, "VIN0001")
    close_request(shop, 100, 7, 10)

    with pytest.raises(RequestAlreadyClosedError):
        ServiceRequestService.ensure_open(shop, 100)
    with pytest.raises(RequestAlreadyClosedError):
        close_request(shop, 100, 7, 20)
    assert closed_count(shop) == 1


def test_work_order_ids_follow_the_number_of_closed_requests(shop):
    for rid in range(1, 6):
        open_request(shop, rid, 1, "VIN0001")

    assert ServiceRequestService.next_work_order_id(shop) == 1
    for n, rid in enumerate(range(1, 4), start=1):
        assert close_request(shop, rid, 7, 10).wid == n

    assert closed_count(shop) == 3
    assert ServiceRequestService.next_work_order_id(shop) == 4
    assert close_request(shop, 4, 7, 10).wid == 4


def test_work_order_id_continues_after_existing_rows(shop):
    for rid in range(1, 4):
        open_request(shop, rid, 1, "VIN0001")
    # Rows written by some other tool with explicit ids.
    shop.execute_update(
        "INSERT INTO Closed_Request (wid, rid, mid, date, comment, bill) VALUES (?, ?, ?, ?, ?, ?)",
        (1, 1, 7, "2020-01-01", "", 10),
    )
    shop.execute_update(
        "INSERT INTO Closed_Request (wid, rid, mid, date, comment, bill) VALUES (?, ?, ?, ?, ?, ?)",
        (2, 2, 7, "2020-01-02", "", 10),
    )

    assert close_request(shop, 3, 7, 10).wid == 3
