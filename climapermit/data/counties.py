"""County permit office profiles.

Fees are 2025 Hillsborough County Development Services schedules for
mechanical permits. Other counties have not been profiled yet and borrow
this one (see ``CountyPermitRepository.get_profile``).
"""

from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from climapermit.models.enums import County, EquipmentType


class FeeSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fees: dict[str, float]
    default_base_fee: float = 100.0
    valuation_threshold: float = 5_000.0
    valuation_rate: float = 0.01
    valuation_fee_cap: float = 200.0
    inspection_fee: float = 25.0
    technology_fee: float = 5.0
    plan_review_fee: float = 50.0
    plan_review_threshold: float = 10_000.0
    expedited_fee: float = 100.0


class ProcessingTimes(BaseModel):
    """Processing time in business days."""

    model_config = ConfigDict(frozen=True)

    standard: int
    expedited: int
    same_day: int


class CountyPermitProfile(BaseModel):
    """Everything a county permit office publishes about HVAC permits."""

    model_config = ConfigDict(frozen=True)

    county: County
    name: str
    department: str
    phone: str
    website: str
    address: str
    fee_schedule: FeeSchedule
    universal_documents: list[str] = Field(default_factory=list)
    documents_by_code: dict[str, list[str]] = Field(default_factory=dict)
    processing_times: ProcessingTimes


PERMIT_DESCRIPTIONS = MappingProxyType({
    "BLD-HVAC-RES-REPL": "Residential HVAC Equipment Replacement",
    "BLD-HVAC-RES-NEW": "New Residential HVAC Installation",
    "BLD-MECH-DUCTWORK": "Ductwork Modification or Installation",
    "BLD-MECH-MOD": "Residential HVAC System Modification",
    "BLD-HVAC-COM": "Commercial HVAC Installation/Modification",
})

DEFAULT_PERMIT_DESCRIPTION = "HVAC Permit"

# Typical installed job value before tonnage, used when the contractor does
# not state a valuation.
EQUIPMENT_BASE_VALUATIONS = MappingProxyType({
    EquipmentType.FURNACE: 3_000.0,
    EquipmentType.AC_UNIT: 4_000.0,
    EquipmentType.HEAT_PUMP: 5_000.0,
    EquipmentType.DUCTWORK: 2_000.0,
    EquipmentType.HVAC_SYSTEM: 8_000.0,
})

DEFAULT_VALUATION = 5_000.0
VALUATION_PER_TON = 500.0
NEW_INSTALLATION_VALUATION_FACTOR = 1.5

HILLSBOROUGH_PROFILE = CountyPermitProfile(
    county=County.HILLSBOROUGH,
    name="Hillsborough County",
    department="Development Services",
    phone="(813) 272-5920",
    website=(
        "https://www.hillsboroughcounty.org/en/residents/"
        "property-owners-and-renters/building-services"
    ),
    address="601 E Kennedy Blvd, Tampa, FL 33602",
    fee_schedule=FeeSchedule(
        base_fees={
            "BLD-HVAC-RES-REPL": 75.0,
            "BLD-HVAC-RES-NEW": 150.0,
            "BLD-MECH-DUCTWORK": 125.0,
            "BLD-HVAC-COM": 250.0,
        },
    ),
    universal_documents=[
        "Valid contractor license (HVAC/Mechanical)",
        "Property owner authorization",
        "Site address and parcel ID",
        "Equipment specifications (make, model, BTU/tonnage)",
        "Estimated cost of work",
        "Scope of work description",
    ],
    documents_by_code={
        "BLD-HVAC-RES-REPL": [
            "Equipment cut sheet/spec sheet",
            "Load calculation (if changing capacity)",
        ],
        "BLD-HVAC-RES-NEW": [
            "ACCA Manual J load calculation",
            "Equipment specifications",
            "Ductwork layout (if applicable)",
            "Electrical load calculation",
            "Site plan showing outdoor unit placement",
        ],
        "BLD-MECH-DUCTWORK": [
            "Ductwork layout plan",
            "Sizing calculations",
            "Material specifications",
        ],
        "BLD-HVAC-COM": [
            "Sealed engineering drawings",
            "ACCA Manual N load calculation",
            "Complete equipment specifications",
            "Ductwork layout and sizing",
            "Electrical calculations",
            "Fire safety compliance documentation",
            "Energy code compliance (Title 24 equivalent)",
        ],
    },
    processing_times=ProcessingTimes(standard=5, expedited=2, same_day=1),
)

COUNTY_PROFILES = MappingProxyType({
    County.HILLSBOROUGH: HILLSBOROUGH_PROFILE,
})

DEFAULT_PROFILE_COUNTY = County.HILLSBOROUGH
