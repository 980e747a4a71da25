"""Permit requirement and merged decision models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from climapermit.models.load import LoadCalculationResult  # noqa: TCH001 (pydantic resolves at runtime)
from climapermit.models.location import LocationAnalysis  # noqa: TCH001
from climapermit.models.permit import PermitClassification  # noqa: TCH001


class PermitOfficeContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    county: str
    department: str
    phone: str
    website: str
    address: str


class FeeEstimate(BaseModel):
    """Estimated permit fees in USD."""

    model_config = ConfigDict(frozen=True)

    base_fee: float
    valuation_fee: float
    additional_fees: dict[str, float] = Field(default_factory=dict)
    total: float
    valuation: float
    currency: str = "USD"


class PermitTimeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    estimated_processing_days: int
    expedited_available: bool = True
    expedited_days: int
    expedited_fee: float


class PermitRequirements(BaseModel):
    """Paperwork, fees, and timing for one classified permit."""

    model_config = ConfigDict(frozen=True)

    description: str
    office: PermitOfficeContact
    fees: FeeEstimate
    documents: list[str] = Field(default_factory=list)
    timeline: PermitTimeline
    warnings: list[str] = Field(default_factory=list)


class RequirementsDecision(BaseModel):
    """Single decision record handed to document generation."""

    model_config = ConfigDict(frozen=True)

    location: LocationAnalysis
    classification: PermitClassification
    requirements: PermitRequirements
    load: LoadCalculationResult | None = None
    additional_forms: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
