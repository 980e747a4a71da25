"""Custom exception hierarchy for the climapermit engine.

None of these escape the engine's public entry points: every provider error
is caught at its fallback seam and turned into a degraded result.
"""

from __future__ import annotations


class ClimaPermitError(Exception):
    """Base exception for all climapermit errors."""


class ProviderError(ClimaPermitError):
    """Raised when an external data provider fails or times out."""


class GeocodingError(ProviderError):
    """Raised when the geocoding provider fails."""


class FloodLookupError(ProviderError):
    """Raised when the flood-hazard lookup fails."""


class AiClassificationError(ProviderError):
    """Raised when the AI classification call fails."""


class AiResponseFormatError(AiClassificationError):
    """Raised when the AI classifier answers with unparseable output."""
