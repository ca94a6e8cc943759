"""
Pydantic models for service requests and the work orders closing them.

A service request is open until a closed request (work order) row
references it.  The work order id ``wid`` and the closing date are set
by the shop, so they only appear on the read model.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .fields import Bill, Odometer, RecordId, RequestDate, Vin


class ServiceRequestCreate(BaseModel):
    rid: RecordId
    customer_id: RecordId
    car_vin: Vin
    date: RequestDate = Field(..., examples=["2024-05-17"])
    odometer: Odometer = Field(..., examples=[48211])
    complain: str = Field("", description="Customer complaint, may be empty")


class ServiceRequestRead(ServiceRequestCreate):
    complain: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class ClosedRequestCreate(BaseModel):
    """Schema for closing an open service request."""

    rid: RecordId
    mid: RecordId
    comment: str = Field("", description="Notes about the repair")
    bill: Bill = Field(..., examples=[240])


class ClosedRequestRead(BaseModel):
    wid: int
    rid: int
    mid: int
    date: str
    comment: Optional[str] = None
    bill: int

    model_config = {
        "from_attributes": True,
    }
