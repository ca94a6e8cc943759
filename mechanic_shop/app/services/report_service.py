"""
Service layer for shop reports.

This module provides the fixed read-only reports the front desk asks
for: cheap repairs, large fleets, low-mileage older cars, the most
serviced cars and customers ranked by what they have been billed.
None of the reports take input; each returns a ``QueryResult`` with
column names so it can be printed as a table or consumed as rows.

All queries are plain joins and aggregates over the shop tables.
"""

from __future__ import annotations

from mechanic_shop.app.core.db import DataStore, QueryResult


# Bills strictly below this amount count as cheap.
CHEAP_BILL_LIMIT = 100
# Customers with strictly more cars than this count as fleet owners.
FLEET_SIZE_LIMIT = 20
CLASSIC_YEAR_LIMIT = 1995
LOW_MILEAGE_LIMIT = 50000


class ReportService:
    """Service providing the shop's canned reports."""

    @classmethod
    def customers_with_bill_less_than_100(cls, store: DataStore) -> QueryResult:
        """Return one row per work order billed under 100, with the customer's name."""
        return store.execute_query_and_return_result(
            """
            SELECT c.fname, c.lname, cr.bill
            FROM Customer c
            JOIN Service_Request sr ON sr.customer_id = c.id
            JOIN Closed_Request cr ON cr.rid = sr.rid
            WHERE cr.bill < ?
            ORDER BY cr.wid
            """,
            (CHEAP_BILL_LIMIT,),
        )

    @classmethod
    def customers_with_more_than_20_cars(cls, store: DataStore) -> QueryResult:
        """Return customers who own more than 20 cars with their car count."""
        return store.execute_query_and_return_result(
            """
            SELECT c.fname, c.lname, COUNT(*) AS num_cars
            FROM Owns o
            JOIN Customer c ON c.id = o.customer_id
            GROUP BY o.customer_id, c.fname, c.lname
            HAVING COUNT(*) > ?
            ORDER BY o.customer_id
            """,
            (FLEET_SIZE_LIMIT,),
        )

    @classmethod
    def cars_before_1995_with_50000_miles(cls, store: DataStore) -> QueryResult:
        """Return cars built before 1995 serviced with an odometer under 50000.

        One row per qualifying service request, so a car serviced twice
        at low mileage is listed twice with each reading.
        """
        return store.execute_query_and_return_result(
            """
            SELECT car.vin, car.make, car.model, car.year, sr.odometer
            FROM Car car
            JOIN Service_Request sr ON sr.car_vin = car.vin
            WHERE car.year < ? AND sr.odometer < ?
            ORDER BY sr.rid
            """,
            (CLASSIC_YEAR_LIMIT, LOW_MILEAGE_LIMIT),
        )

    @classmethod
    def cars_with_the_most_services(cls, store: DataStore) -> QueryResult:
        """Return the car(s) whose service request count is the highest.

        Ties are all returned, ordered by VIN.  Cars without any service
        request never qualify, so an empty shop yields no rows.
        """
        return store.execute_query_and_return_result(
            """
            WITH counts AS (
                SELECT car_vin, COUNT(rid) AS service_count
                FROM Service_Request
                GROUP BY car_vin
            )
            SELECT car.vin, car.make, car.model, car.year, counts.service_count
            FROM Car car
            JOIN counts ON counts.car_vin = car.vin
            WHERE counts.service_count = (SELECT MAX(service_count) FROM counts)
            ORDER BY car.vin
            """
        )

    @classmethod
    def customers_by_total_bill(cls, store: DataStore) -> QueryResult:
        """Return customers ranked by the sum of their work order bills.

        Only customers with at least one closed request appear.  The
        order is strictly by descending total; equal totals are ordered
        by customer id.
        """
        return store.execute_query_and_return_result(
            """
            SELECT c.id, c.fname, c.lname, totals.total_bill
            FROM Customer c
            JOIN (
                SELECT sr.customer_id, SUM(cr.bill) AS total_bill
                FROM Service_Request sr
                JOIN Closed_Request cr ON cr.rid = sr.rid
                GROUP BY sr.customer_id
            ) AS totals ON totals.customer_id = c.id
            ORDER BY totals.total_bill DESC, c.id ASC
            """
        )
