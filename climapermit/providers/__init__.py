"""External data providers consumed by the engine."""

from climapermit.providers.ai import (
    AnthropicClassificationProvider,
    ClassificationProvider,
)
from climapermit.providers.flood import (
    FemaFloodZoneProvider,
    FloodLookupResult,
    FloodZoneProvider,
)
from climapermit.providers.geocoding import (
    Geocoder,
    GoogleGeocoder,
    NominatimGeocoder,
)

__all__ = [
    "AnthropicClassificationProvider",
    "ClassificationProvider",
    "FemaFloodZoneProvider",
    "FloodLookupResult",
    "FloodZoneProvider",
    "Geocoder",
    "GoogleGeocoder",
    "NominatimGeocoder",
]
