"""ClimaPermit HVAC permit requirements engine.

Usage::

    from climapermit import create_default_engine, PermitJobRequest

    engine = create_default_engine()
    decision = engine.determine(job)
"""

from climapermit.engine import RequirementsEngine
from climapermit.factory import create_default_engine
from climapermit.loads import ManualJLoadCalculator, SimplifiedLoadCalculator
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
    PermitCategory,
    PropertyType,
    WindowQuality,
)
from climapermit.models.load import BuildingInput, LoadCalculationResult
from climapermit.models.location import LocationAnalysis
from climapermit.models.permit import (
    JobLocation,
    PermitClassification,
    PermitJobRequest,
)
from climapermit.models.requirements import PermitRequirements, RequirementsDecision
from climapermit.services.location_intelligence import LocationIntelligence
from climapermit.services.permit_classifier import PermitClassifier

__all__ = [
    "BuildingInput",
    "CalculatorVariant",
    "Complexity",
    "Confidence",
    "County",
    "DecisionMethod",
    "EquipmentMatch",
    "EquipmentType",
    "InsulationQuality",
    "JobLocation",
    "JobType",
    "LoadCalculationResult",
    "LocationAnalysis",
    "LocationIntelligence",
    "ManualJLoadCalculator",
    "PermitCategory",
    "PermitClassification",
    "PermitClassifier",
    "PermitJobRequest",
    "PermitRequirements",
    "PropertyType",
    "RequirementsDecision",
    "RequirementsEngine",
    "SimplifiedLoadCalculator",
    "WindowQuality",
    "create_default_engine",
]
