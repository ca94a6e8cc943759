"""Builders for shop records used across the tests."""

import io

from mechanic_shop.app.cli.prompts import Console
from mechanic_shop.app.schemas.car import CarCreate
from mechanic_shop.app.schemas.customer import CustomerCreate
from mechanic_shop.app.schemas.mechanic import MechanicCreate
from mechanic_shop.app.schemas.service_request import ClosedRequestCreate, ServiceRequestCreate
from mechanic_shop.app.services.car_service import CarService
from mechanic_shop.app.services.customer_service import CustomerService
from mechanic_shop.app.services.mechanic_service import MechanicService
from mechanic_shop.app.services.service_request_service import ServiceRequestService


def scripted_console(*lines):
    """Console reading the given lines and writing to a StringIO."""
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    return Console(stdin=stdin, stdout=io.StringIO())


def add_customer(store, customer_id, fname="Jane", lname="Doe"):
    return CustomerService.create_customer(
        store,
        CustomerCreate(id=customer_id, fname=fname, lname=lname, phone="555-0100", address="1 Main St"),
    )


def add_mechanic(store, mechanic_id, fname="Sam", lname="Wrench"):
    return MechanicService.create_mechanic(
        store, MechanicCreate(id=mechanic_id, fname=fname, lname=lname, experience=5)
    )


def add_car(store, vin, year=2005, owner_id=None, make="Honda", model="Civic"):
    return CarService.create_car(
        store, CarCreate(vin=vin, make=make, model=model, year=year, owner_id=owner_id)
    )


def open_request(store, rid, customer_id, vin, odometer=60000, date="2024-01-15"):
    return ServiceRequestService.create_request(
        store,
        ServiceRequestCreate(
            rid=rid, customer_id=customer_id, car_vin=vin, date=date, odometer=odometer, complain="noise"
        ),
    )


def close_request(store, rid, mid, bill):
    return ServiceRequestService.close_request(
        store, ClosedRequestCreate(rid=rid, mid=mid, comment="fixed", bill=bill)
    )
