"""
SQLite data store and schema bootstrap.

This module provides the single store handle used by the shop
(``DataStore``), a helper for opening a configured connection
(``get_connection``) and the schema initialisation run at startup
(``init_db``).  Every statement goes through ``?`` parameter binding;
values are never formatted into SQL text.

The store is opened once when the tool starts and closed when it
exits.  Use it as a context manager so the connection is released on
every exit path::

    with DataStore(get_database_path()) as store:
        init_db(store)
        ...
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence

from .config import settings
from .exceptions import StoreConnectionError, StoreError


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS Customer (
    id INTEGER PRIMARY KEY,
    fname TEXT NOT NULL,
    lname TEXT NOT NULL,
    phone TEXT NOT NULL,
    address TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS Mechanic (
    id INTEGER PRIMARY KEY,
    fname TEXT NOT NULL,
    lname TEXT NOT NULL,
    experience INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS Car (
    vin TEXT PRIMARY KEY,
    make TEXT NOT NULL,
    model TEXT NOT NULL,
    year INTEGER NOT NULL CHECK (year >= 1970)
);

CREATE TABLE IF NOT EXISTS Owns (
    ownership_id INTEGER PRIMARY KEY AUTOINCREMENT,
    customer_id INTEGER NOT NULL,
    car_vin TEXT NOT NULL,
    FOREIGN KEY(customer_id) REFERENCES Customer(id),
    FOREIGN KEY(car_vin) REFERENCES Car(vin)
);

CREATE TABLE IF NOT EXISTS Service_Request (
    rid INTEGER PRIMARY KEY,
    customer_id INTEGER NOT NULL,
    car_vin TEXT NOT NULL,
    date TEXT NOT NULL,
    odometer INTEGER NOT NULL CHECK (odometer > 0),
    complain TEXT,
    FOREIGN KEY(customer_id) REFERENCES Customer(id),
    FOREIGN KEY(car_vin) REFERENCES Car(vin)
);

-- wid comes from the AUTOINCREMENT sequence; rid may be closed once.
CREATE TABLE IF NOT EXISTS Closed_Request (
    wid INTEGER PRIMARY KEY AUTOINCREMENT,
    rid INTEGER NOT NULL UNIQUE,
    mid INTEGER NOT NULL,
    date TEXT NOT NULL,
    comment TEXT,
    bill INTEGER NOT NULL CHECK (bill >= 0),
    FOREIGN KEY(rid) REFERENCES Service_Request(rid),
    FOREIGN KEY(mid) REFERENCES Mechanic(id)
);

CREATE INDEX IF NOT EXISTS idx_owns_customer_id ON Owns(customer_id);
CREATE INDEX IF NOT EXISTS idx_service_request_car_vin ON Service_Request(car_vin);
CREATE INDEX IF NOT EXISTS idx_service_request_customer_id ON Service_Request(customer_id);
"""


@dataclass
class QueryResult:
    """Column names and rows returned by a read query."""

    columns: List[str]
    rows: List[tuple] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the project root.
    """
    db_url = db_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # mechanic_shop/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    The connection runs in autocommit mode (each statement is atomic on
    its own) and ``DataStore.transaction`` opens explicit transactions
    where several statements must commit together.  Rows come back as
    ``sqlite3.Row`` so columns can be read by name, and foreign key
    enforcement is switched on for the lifetime of the connection.
    """
    try:
        conn = sqlite3.connect(db_path, isolation_level=None)
    except sqlite3.Error as exc:
        raise StoreConnectionError(f"Unable to connect to database {db_path}: {exc}") from exc
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


class DataStore:
    """The shop's single handle on the relational store."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def open(self) -> "DataStore":
        if self._conn is None:
            logger.info("Connecting to database %s", self.db_path)
            self._conn = get_connection(self.db_path)
        return self

    def close(self) -> None:
        if self._conn is not None:
            logger.info("Disconnecting from database %s", self.db_path)
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "DataStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Data store is not open")
        return self._conn

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        try:
            return self.connection.execute(sql, tuple(params))
        except (sqlite3.Error, OverflowError) as exc:
            logger.warning("Statement failed: %s", exc)
            raise StoreError(str(exc)) from exc

    def execute_update(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT/UPDATE/DELETE statement and return the last row id."""
        cursor = self._execute(sql, params)
        return cursor.lastrowid

    def execute_query(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a read query and return how many rows it produced."""
        return len(self._execute(sql, params).fetchall())

    def execute_query_and_return_result(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """Run a read query and return its column names and rows."""
        cursor = self._execute(sql, params)
        rows = cursor.fetchall()
        columns = [col[0] for col in cursor.description or ()]
        return QueryResult(columns=columns, rows=[tuple(row) for row in rows])

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        """Run a read query and return its first row, or ``None``."""
        return self._execute(sql, params).fetchone()

    def current_sequence_value(self, table: str) -> int:
        """Return the current AUTOINCREMENT value for ``table``, or -1."""
        row = self._execute("SELECT seq FROM sqlite_sequence WHERE name = ?", (table,)).fetchone()
        return row["seq"] if row else -1

    @contextmanager
    def transaction(self) -> Iterator["DataStore"]:
        """Run the enclosed statements in one write transaction.

        ``BEGIN IMMEDIATE`` takes the write lock up front, so two shops
        working on the same database file cannot interleave between a
        read and the write that depends on it.
        """
        conn = self.connection
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        try:
            yield self
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        else:
            try:
                conn.execute("COMMIT")
            except sqlite3.Error as exc:
                conn.execute("ROLLBACK")
                raise StoreError(str(exc)) from exc


def init_db(store: DataStore) -> None:
    """Create the shop tables if they do not exist yet."""
    try:
        store.connection.executescript(SCHEMA)
    except sqlite3.Error as exc:
        raise StoreConnectionError(f"Unable to initialise schema: {exc}") from exc
