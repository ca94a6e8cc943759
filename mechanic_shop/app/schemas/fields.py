"""
Constrained field types shared by the schemas and the prompts.

String fields must be between 1 and their maximum length; they are
kept verbatim (no trimming).  Numbers never exceed the range of a
SQLite INTEGER.  Dates follow the ISO-8601 calendar date form
``YYYY-MM-DD`` and must name a real day.
"""

from datetime import date
from typing import Annotated

from pydantic import AfterValidator, Field, StringConstraints


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _check_calendar_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{value} is not a valid calendar date")
    return value


Name = Annotated[str, StringConstraints(min_length=1, max_length=32)]
Phone = Annotated[str, StringConstraints(min_length=1, max_length=13)]
Address = Annotated[str, StringConstraints(min_length=1, max_length=256)]
Vin = Annotated[str, StringConstraints(min_length=1, max_length=16)]
Make = Annotated[str, StringConstraints(min_length=1, max_length=32)]
Model = Annotated[str, StringConstraints(min_length=1, max_length=32)]

# SQLite INTEGER is a signed 64-bit value; larger numbers cannot be bound.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

RecordId = Annotated[int, Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]
Experience = Annotated[int, Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]
CarYear = Annotated[int, Field(ge=1970, le=SQLITE_INT_MAX)]
Odometer = Annotated[int, Field(gt=0, le=SQLITE_INT_MAX)]
Bill = Annotated[int, Field(ge=0, le=SQLITE_INT_MAX)]

RequestDate = Annotated[
    str,
    StringConstraints(pattern=DATE_PATTERN),
    AfterValidator(_check_calendar_date),
]
