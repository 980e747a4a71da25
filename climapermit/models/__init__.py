"""Domain models for the climapermit engine."""

from climapermit.models.enums import (
    CalculatorVariant,
    Complexity,
    Confidence,
    County,
    DecisionMethod,
    EquipmentMatch,
    EquipmentType,
    InsulationQuality,
    JobType,
    JurisdictionType,
    PermitCategory,
    PropertyType,
    RestrictionReason,
    WindowQuality,
)
from climapermit.models.load import BuildingInput, LoadCalculationResult
from climapermit.models.location import (
    CoastalInfo,
    Coordinates,
    FloodZoneInfo,
    HeightRestrictionInfo,
    JurisdictionInfo,
    LocationAnalysis,
    SiteAddress,
    SpecialDistrictInfo,
)
from climapermit.models.permit import (
    JobLocation,
    PermitClassification,
    PermitJobRequest,
)
from climapermit.models.requirements import (
    FeeEstimate,
    PermitOfficeContact,
    PermitRequirements,
    PermitTimeline,
    RequirementsDecision,
)

__all__ = [
    "BuildingInput",
    "CalculatorVariant",
    "CoastalInfo",
    "Complexity",
    "Confidence",
    "Coordinates",
    "County",
    "DecisionMethod",
    "EquipmentMatch",
    "EquipmentType",
    "FeeEstimate",
    "FloodZoneInfo",
    "HeightRestrictionInfo",
    "InsulationQuality",
    "JobLocation",
    "JobType",
    "JurisdictionInfo",
    "JurisdictionType",
    "LoadCalculationResult",
    "LocationAnalysis",
    "PermitCategory",
    "PermitClassification",
    "PermitJobRequest",
    "PermitOfficeContact",
    "PermitRequirements",
    "PermitTimeline",
    "PropertyType",
    "RequirementsDecision",
    "RestrictionReason",
    "SiteAddress",
    "SpecialDistrictInfo",
    "WindowQuality",
]
