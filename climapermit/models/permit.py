"""Permit job request and classification models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from climapermit.models.enums import (
    Complexity,
    County,
    DecisionMethod,
    EquipmentType,
    JobType,
    PermitCategory,
    PropertyType,
)


class JobLocation(BaseModel):
    """Where the job is, as entered on the intake form."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    county: County
    zip_code: str = Field(pattern=r"^\d{5}$")
    state: str = "FL"


class PermitJobRequest(BaseModel):
    """An HVAC job to classify.

    Field ranges mirror the intake form so anything reaching the engine is
    already well-typed.
    """

    model_config = ConfigDict(frozen=True)

    equipment_type: EquipmentType
    job_type: JobType
    btu: int | None = Field(default=None, ge=5_000, le=500_000)
    tonnage: float | None = Field(default=None, ge=0.5, le=25)
    property_type: PropertyType | None = None
    location: JobLocation
    additional_details: str | None = Field(default=None, max_length=1000)


class PermitClassification(BaseModel):
    """Permit category decision, tagged with the stage that produced it."""

    model_config = ConfigDict(frozen=True)

    category: PermitCategory
    jurisdiction_code: str
    reasoning: str
    special_considerations: list[str] = Field(default_factory=list)
    complexity: Complexity
    decision_method: DecisionMethod
