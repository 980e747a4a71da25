"""Factory functions for creating pre-configured RequirementsEngine instances."""

from __future__ import annotations

import logging

from climapermit.config import Settings
from climapermit.data.repository import CountyPermitRepository, GeoKnowledgeBase
from climapermit.engine import RequirementsEngine
from climapermit.providers.ai import AnthropicClassificationProvider
from climapermit.providers.flood import FemaFloodZoneProvider
from climapermit.providers.geocoding import GoogleGeocoder, NominatimGeocoder
from climapermit.services.location_intelligence import LocationIntelligence
from climapermit.services.permit_classifier import PermitClassifier

logger = logging.getLogger(__name__)


def create_default_engine(settings: Settings | None = None) -> RequirementsEngine:
    """Create a RequirementsEngine wired from settings.

    Geocoding uses Google when ``GOOGLE_MAPS_API_KEY`` is set and
    OpenStreetMap Nominatim otherwise. Flood zones come from FEMA NFHL.
    Low-confidence classifications are escalated to Claude only when
    ``ANTHROPIC_API_KEY`` is set.

    Args:
        settings: Explicit settings; read from the environment when omitted.

    Example::

        from climapermit import create_default_engine

        engine = create_default_engine()
        location = engine.analyze_location("100 Main St", "Tampa", "FL", "33602")
    """
    settings = settings or Settings.from_env()

    if settings.google_maps_api_key:
        geocoder: GoogleGeocoder | NominatimGeocoder = GoogleGeocoder(
            api_key=settings.google_maps_api_key,
            timeout=settings.http_timeout,
        )
    else:
        geocoder = NominatimGeocoder(timeout=settings.http_timeout)

    ai_provider = None
    if settings.anthropic_api_key:
        ai_provider = AnthropicClassificationProvider(
            api_key=settings.anthropic_api_key,
            model=settings.ai_model,
            timeout=settings.ai_timeout,
        )
    logger.info(
        "Engine wired with %s geocoding, AI escalation %s",
        type(geocoder).__name__,
        "enabled" if ai_provider is not None else "disabled",
    )

    location_intelligence = LocationIntelligence(
        geocoder=geocoder,
        flood_provider=FemaFloodZoneProvider(timeout=settings.http_timeout),
        knowledge_base=GeoKnowledgeBase(),
    )
    return RequirementsEngine(
        location_intelligence=location_intelligence,
        classifier=PermitClassifier(ai_provider=ai_provider),
        county_repository=CountyPermitRepository(),
    )
