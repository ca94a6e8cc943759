"""Pydantic models for mechanic data."""

from pydantic import BaseModel, Field

from .fields import Experience, Name, RecordId


class MechanicCreate(BaseModel):
    id: RecordId
    fname: Name = Field(..., examples=["Sam"])
    lname: Name = Field(..., examples=["Wrench"])
    experience: Experience = Field(..., examples=[7], description="Years of experience")


class MechanicRead(MechanicCreate):
    model_config = {
        "from_attributes": True,
    }
