"""Decision components composed by the requirements engine."""

from climapermit.services.location_intelligence import (
    LocationIntelligence,
    interpret_flood_zone,
)
from climapermit.services.permit_classifier import (
    PermitClassifier,
    classify_by_rules,
    is_high_confidence,
)

__all__ = [
    "LocationIntelligence",
    "PermitClassifier",
    "classify_by_rules",
    "interpret_flood_zone",
    "is_high_confidence",
]
