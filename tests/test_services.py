"""Inserts, read-backs and existence checks for customers, mechanics and cars."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from mechanic_shop.app.core.db import DataStore
from mechanic_shop.app.core.exceptions import DuplicateKeyError, ReferenceNotFoundError, StoreError
from mechanic_shop.app.schemas.car import CarCreate
from mechanic_shop.app.schemas.customer import CustomerCreate
from mechanic_shop.app.services.car_service import CarService
from mechanic_shop.app.services.customer_service import CustomerService
from mechanic_shop.app.services.mechanic_service import MechanicService

from helpers import add_car, add_customer, add_mechanic


def test_customer_round_trip(store):
    data = CustomerCreate(
        id=17,
        fname="O'Brien",
        lname="Smith; DROP TABLE Customer;--",
        phone="+1-951-555-01",
        address="42 Wallaby Way, Sydney",
    )
    created = CustomerService.create_customer(store, data)

    stored = CustomerService.get_customer(store, 17)
    assert stored == created
    assert stored.fname == "O'Brien"
    assert stored.lname == "Smith; DROP TABLE Customer;--"
    assert stored.phone == "+1-951-555-01"
    assert stored.address == "42 Wallaby Way, Sydney"


def test_missing_customer_reads_as_none(store):
    assert CustomerService.get_customer(store, 404) is None


def test_customer_existence_checks(store):
    add_customer(store, 1)

    CustomerService.ensure_exists(store, 1)
    with pytest.raises(ReferenceNotFoundError) as excinfo:
        CustomerService.ensure_exists(store, 2)
    assert excinfo.value.entity == "Customer"
    assert excinfo.value.key == 2

    CustomerService.ensure_absent(store, 2)
    with pytest.raises(DuplicateKeyError):
        CustomerService.ensure_absent(store, 1)


def test_duplicate_customer_insert_is_a_store_error(store):
    add_customer(store, 1)
    with pytest.raises(StoreError):
        add_customer(store, 1, fname="Other")
    assert CustomerService.get_customer(store, 1).fname == "Jane"


def test_customer_schema_enforces_lengths():
    with pytest.raises(PydanticValidationError):
        CustomerCreate(id=1, fname="", lname="Doe", phone="1", address="x")
    with pytest.raises(PydanticValidationError):
        CustomerCreate(id=1, fname="Jane", lname="Doe", phone="1" * 14, address="x")


def test_mechanic_round_trip(store):
    add_mechanic(store, 9, fname="Ada", lname="Lovelace")

    mechanic = MechanicService.get_mechanic(store, 9)
    assert (mechanic.id, mechanic.fname, mechanic.lname, mechanic.experience) == (9, "Ada", "Lovelace", 5)
    MechanicService.ensure_exists(store, 9)
    with pytest.raises(ReferenceNotFoundError):
        MechanicService.ensure_exists(store, 10)
    with pytest.raises(DuplicateKeyError):
        MechanicService.ensure_absent(store, 9)


def test_car_without_owner(store):
    car = add_car(store, "VIN0001", year=1970)

    assert CarService.get_car(store, "VIN0001") == car
    assert store.execute_query("SELECT * FROM Owns") == 0


def test_car_with_owner_records_ownership(store):
    add_customer(store, 3)
    add_car(store, "VIN0001", owner_id=3)
    add_car(store, "VIN0002", owner_id=3)

    assert CarService.list_owned_vins(store, 3) == ["VIN0001", "VIN0002"]


def test_car_with_unknown_owner_is_not_half_inserted(store):
    with pytest.raises(StoreError):
        add_car(store, "VIN0001", owner_id=99)

    assert not CarService.exists(store, "VIN0001")
    assert store.execute_query("SELECT * FROM Owns") == 0


def test_car_schema_rejects_old_cars():
    with pytest.raises(PydanticValidationError):
        CarCreate(vin="V", make="Ford", model="T", year=1969)


def test_store_operations_need_an_open_store():
    store = DataStore(":memory:")
    with pytest.raises(StoreError, match="not open"):
        store.execute_query("SELECT 1")


def test_store_returns_columns_and_rows(store):
    add_customer(store, 1, fname="Ann")
    add_customer(store, 2, fname="Bob")

    result = store.execute_query_and_return_result(
        "SELECT id, fname FROM Customer WHERE id >= ? ORDER BY id", (1,)
    )
    assert result.columns == ["id", "fname"]
    assert result.rows == [(1, "Ann"), (2, "Bob")]
    assert len(result) == 2


def test_transaction_rolls_back_on_error(store):
    with pytest.raises(RuntimeError):
        with store.transaction():
            add_customer(store, 1)
            raise RuntimeError("boom")

    assert not CustomerService.exists(store, 1)


def test_oversized_integers_are_store_errors(store):
    with pytest.raises(StoreError, match="too large"):
        store.execute_query("SELECT id FROM Customer WHERE id = ?", (2**64,))
