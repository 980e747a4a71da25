"""Static knowledge tables and lookup repositories."""

from climapermit.data.counties import CountyPermitProfile
from climapermit.data.geo_tables import Airport, WaterfrontRegion
from climapermit.data.repository import (
    CountyPermitRepository,
    GeoKnowledgeBase,
    normalize_city,
)

__all__ = [
    "Airport",
    "CountyPermitProfile",
    "CountyPermitRepository",
    "GeoKnowledgeBase",
    "WaterfrontRegion",
    "normalize_city",
]
