"""
Pydantic models for customer data.

Customer ids are chosen by the operator, so ``id`` is part of the
create schema rather than assigned by the store.
"""

from pydantic import BaseModel, Field

from .fields import Address, Name, Phone, RecordId


class CustomerBase(BaseModel):
    fname: Name = Field(..., examples=["Jane"])
    lname: Name = Field(..., examples=["Doe"])
    phone: Phone = Field(..., examples=["(951)555-0100"])
    address: Address = Field(..., examples=["900 University Ave, Riverside"])


class CustomerCreate(CustomerBase):
    """Schema for adding a customer."""

    id: RecordId


class CustomerRead(CustomerBase):
    """Schema for a customer read back from the store."""

    id: RecordId

    model_config = {
        "from_attributes": True,
    }
