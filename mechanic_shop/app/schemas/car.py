"""
Pydantic models for car data.

A car is keyed by its VIN.  ``CarCreate.owner_id`` optionally names
the customer who owns the car; it is recorded in the ``Owns`` table
rather than on the car itself.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .fields import CarYear, Make, Model, RecordId, Vin


class CarBase(BaseModel):
    vin: Vin = Field(..., examples=["1HGCM82633A0043"])
    make: Make = Field(..., examples=["Honda"])
    model: Model = Field(..., examples=["Accord"])
    year: CarYear = Field(..., examples=[2003])


class CarCreate(CarBase):
    """Schema for adding a car, optionally with its owner."""

    owner_id: Optional[RecordId] = Field(None, description="Customer id of the owner, if known")


class CarRead(CarBase):
    model_config = {
        "from_attributes": True,
    }
