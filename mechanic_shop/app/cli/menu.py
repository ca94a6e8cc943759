"""
Main menu of the mechanic shop.

``MechanicShop`` shows the numbered menu, reads a choice and runs the
selected operation to completion before showing the menu again.  Each
operation asks for its fields one by one (re-asking on invalid input
or unknown references), hands validated values to the services and
prints the outcome.

Operations are isolated from each other: a ``ShopError`` that escapes
an operation (in practice a ``StoreError`` from a rejected statement)
abandons that operation only.  The failed statement is not retried.
"""

import logging
from functools import partial
from typing import Annotated, Callable, List, Tuple

from pydantic import Field

from mechanic_shop.app.core.db import DataStore, QueryResult
from mechanic_shop.app.core.exceptions import ShopError
from mechanic_shop.app.schemas.car import CarCreate
from mechanic_shop.app.schemas.customer import CustomerCreate
from mechanic_shop.app.schemas.fields import (
    Address,
    Bill,
    CarYear,
    Experience,
    Make,
    Model,
    Name,
    Odometer,
    Phone,
    RecordId,
    RequestDate,
    Vin,
)
from mechanic_shop.app.schemas.mechanic import MechanicCreate
from mechanic_shop.app.schemas.service_request import ClosedRequestCreate, ServiceRequestCreate
from mechanic_shop.app.services.car_service import CarService
from mechanic_shop.app.services.customer_service import CustomerService
from mechanic_shop.app.services.mechanic_service import MechanicService
from mechanic_shop.app.services.report_service import ReportService
from mechanic_shop.app.services.service_request_service import ServiceRequestService

from .prompts import Console, FieldPrompt
from .render import print_result


logger = logging.getLogger(__name__)


class MechanicShop:
    """Menu-driven front end over an open ``DataStore``."""

    EXIT_CHOICE = 11

    def __init__(self, store: DataStore, console: Console) -> None:
        self.store = store
        self.console = console
        self.operations: List[Tuple[str, Callable[[], None]]] = [
            ("AddCustomer", self.add_customer),
            ("AddMechanic", self.add_mechanic),
            ("AddCar", self.add_car),
            ("InsertServiceRequest", self.insert_service_request),
            ("CloseServiceRequest", self.close_service_request),
            ("ListCustomersWithBillLessThan100", self.list_customers_with_bill_less_than_100),
            ("ListCustomersWithMoreThan20Cars", self.list_customers_with_more_than_20_cars),
            ("ListCarsBefore1995With50000Miles", self.list_cars_before_1995_with_50000_miles),
            ("ListCarsWithTheMostServices", self.list_cars_with_the_most_services),
            ("ListCustomersInDescendingOrderOfTheirTotalBill", self.list_customers_by_total_bill),
        ]

    # ------------------------------------------------------------------
    # Menu loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Serve menu choices until the operator exits or input ends."""
        keep_on = True
        while keep_on:
            self.show_menu()
            try:
                keep_on = self.dispatch(self.read_choice())
            except EOFError:
                self.console.write()
                logger.info("Input closed, leaving the menu")
                keep_on = False

    def show_menu(self) -> None:
        self.console.write("MAIN MENU")
        self.console.write("---------")
        for number, (title, _) in enumerate(self.operations, start=1):
            self.console.write(f"{number}. {title}")
        self.console.write(f"{self.EXIT_CHOICE}. < EXIT")

    def read_choice(self) -> int:
        prompt = FieldPrompt(
            "Choice",
            Annotated[int, Field(ge=1, le=self.EXIT_CHOICE)],
            question="Please make your choice: ",
            strip=True,
        )
        while not prompt.accepted:
            self.console.write(prompt.question, end="")
            prompt.submit(self.console.read_line())
            if prompt.error is not None:
                self.console.write("Your input is invalid!")
        return prompt.value

    def dispatch(self, choice: int) -> bool:
        """Run the operation for ``choice``; return False when exiting."""
        if choice == self.EXIT_CHOICE:
            return False
        title, operation = self.operations[choice - 1]
        try:
            operation()
        except ShopError as exc:
            logger.error("%s abandoned: %s", title, exc)
            self.console.write(f"{title} failed: {exc}")
        return True

    def _ask(self, *args, **kwargs):
        return self.console.ask(FieldPrompt(*args, **kwargs))

    def _print_report(self, title: str, result: QueryResult) -> None:
        self.console.write(title)
        row_count = print_result(result, self.console.write)
        self.console.write(f"total row(s): {row_count}")

    # ------------------------------------------------------------------
    # Operations 1-5: records and the request lifecycle
    # ------------------------------------------------------------------

    def add_customer(self) -> None:
        customer_id = self._ask(
            "Customer id", RecordId, "Enter customer id: ", strip=True,
            checks=[partial(CustomerService.ensure_absent, self.store)],
        )
        data = CustomerCreate(
            id=customer_id,
            fname=self._ask("First name", Name, "Enter customer's first name: "),
            lname=self._ask("Last name", Name, "Enter customer's last name: "),
            phone=self._ask("Phone", Phone, "Enter customer's phone number: "),
            address=self._ask("Address", Address, "Enter customer's address: "),
        )
        customer = CustomerService.create_customer(self.store, data)
        self.console.write(f"Customer {customer.id} ({customer.fname} {customer.lname}) added.")

    def add_mechanic(self) -> None:
        mechanic_id = self._ask(
            "Mechanic id", RecordId, "Enter mechanic id: ", strip=True,
            checks=[partial(MechanicService.ensure_absent, self.store)],
        )
        data = MechanicCreate(
            id=mechanic_id,
            fname=self._ask("First name", Name, "Enter mechanic's first name: "),
            lname=self._ask("Last name", Name, "Enter mechanic's last name: "),
            experience=self._ask("Experience", Experience, "Enter mechanic's years of experience: ", strip=True),
        )
        mechanic = MechanicService.create_mechanic(self.store, data)
        self.console.write(f"Mechanic {mechanic.id} ({mechanic.fname} {mechanic.lname}) added.")

    def add_car(self) -> None:
        vin = self._ask(
            "VIN", Vin, "Enter car's vin: ",
            checks=[partial(CarService.ensure_absent, self.store)],
        )
        data = CarCreate(
            vin=vin,
            make=self._ask("Make", Make, "Enter car's make: "),
            model=self._ask("Model", Model, "Enter car's model: "),
            year=self._ask("Year", CarYear, "Enter year of the car: ", strip=True),
            owner_id=self._ask(
                "Owner id", RecordId, "Enter owner's customer id (blank for none): ",
                strip=True, optional=True,
                checks=[partial(CustomerService.ensure_exists, self.store)],
            ),
        )
        car = CarService.create_car(self.store, data)
        self.console.write(f"Car {car.vin} ({car.year} {car.make} {car.model}) added.")

    def insert_service_request(self) -> None:
        rid = self._ask(
            "Request id", RecordId, "Enter rid for service request: ", strip=True,
            checks=[partial(ServiceRequestService.ensure_absent, self.store)],
        )
        data = ServiceRequestCreate(
            rid=rid,
            customer_id=self._ask(
                "Customer id", RecordId, "Enter customer id for service request: ", strip=True,
                checks=[partial(CustomerService.ensure_exists, self.store)],
            ),
            car_vin=self._ask(
                "VIN", Vin, "Enter car vin for service request: ",
                checks=[partial(CarService.ensure_exists, self.store)],
            ),
            date=self._ask("Date", RequestDate, "Enter date of service request (YYYY-MM-DD): ", strip=True),
            odometer=self._ask("Odometer", Odometer, "Enter odometer reading: ", strip=True),
            complain=self._ask("Complaint", str, "Enter complaint: "),
        )
        request = ServiceRequestService.create_request(self.store, data)
        self.console.write(f"Service request {request.rid} opened.")

    def close_service_request(self) -> None:
        rid = self._ask(
            "Request id", RecordId, "Enter a service request number: ", strip=True,
            checks=[partial(ServiceRequestService.ensure_open, self.store)],
        )
        mid = self._ask(
            "Mechanic id", RecordId, "Enter mechanic id: ", strip=True,
            checks=[partial(MechanicService.ensure_exists, self.store)],
        )
        data = ClosedRequestCreate(
            rid=rid,
            mid=mid,
            comment=self._ask("Comment", str, "Enter comments about repair: "),
            bill=self._ask("Bill", Bill, "Enter bill amount to the customer: ", strip=True),
        )
        work_order = ServiceRequestService.close_request(self.store, data)
        self.console.write(
            f"Service request {work_order.rid} closed as work order {work_order.wid} on {work_order.date}."
        )

    # ------------------------------------------------------------------
    # Operations 6-10: reports
    # ------------------------------------------------------------------

    def list_customers_with_bill_less_than_100(self) -> None:
        self._print_report(
            "Customers with a bill less than 100",
            ReportService.customers_with_bill_less_than_100(self.store),
        )

    def list_customers_with_more_than_20_cars(self) -> None:
        self._print_report(
            "Customers with more than 20 cars",
            ReportService.customers_with_more_than_20_cars(self.store),
        )

    def list_cars_before_1995_with_50000_miles(self) -> None:
        self._print_report(
            "Cars built before 1995 serviced under 50000 miles",
            ReportService.cars_before_1995_with_50000_miles(self.store),
        )

    def list_cars_with_the_most_services(self) -> None:
        self._print_report(
            "Cars with the most services",
            ReportService.cars_with_the_most_services(self.store),
        )

    def list_customers_by_total_bill(self) -> None:
        self._print_report(
            "Customers in descending order of their total bill",
            ReportService.customers_by_total_bill(self.store),
        )
