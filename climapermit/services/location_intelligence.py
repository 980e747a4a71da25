"""Location intelligence: what governs a job site.

Turns a street address into a ``LocationAnalysis``:

1. **Geocode** through the injected geocoder, falling back to the city
   centroid table and then to the regional default point.
2. **County and jurisdiction** from the city tables.
3. **Flood zone** from the flood-hazard provider, falling back to the
   waterfront-region heuristic.
4. **Coastal wind zone**, **airport height restriction**, and **special
   districts** from the knowledge base.
5. **Additional forms and warnings** derived from the steps above.

Provider failures never propagate: each one is logged, replaced by a local
fallback, and recorded as a warning with a lower confidence level.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from climapermit.data import geo_tables
from climapermit.data.repository import GeoKnowledgeBase
from climapermit.exceptions import ProviderError
from climapermit.models.enums import (
    Confidence,
    County,
    JurisdictionType,
    RestrictionReason,
)
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

if TYPE_CHECKING:
    from climapermit.providers.flood import FloodZoneProvider
    from climapermit.providers.geocoding import Geocoder

logger = logging.getLogger(__name__)

# Provisional until FIRM panel lookups are wired in.
PLACEHOLDER_BASE_FLOOD_ELEVATION_FT = 10.0

_BFE_ZONES = re.compile(r"^(AE|VE|AH|AO)")
_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

_CONFIDENCE_STEPS = (Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW)


def interpret_flood_zone(zone_code: str, panel_id: str | None = None) -> FloodZoneInfo:
    """Translate a FEMA zone designation into permit consequences.

    ``A*`` and ``V*`` zones are Special Flood Hazard Areas and need an
    elevation certificate; ``V*`` zones are also coastal high-hazard.
    Shaded X (``X500``, ``B``) is moderate risk. Everything else is
    minimal-risk ``X``.
    """
    zone = zone_code.strip().upper()

    if zone.startswith(("A", "V")):
        bfe = PLACEHOLDER_BASE_FLOOD_ELEVATION_FT if _BFE_ZONES.match(zone) else None
        return FloodZoneInfo(
            zone=zone,
            is_flood_zone=True,
            requires_elevation_certificate=True,
            coastal_high_hazard=zone.startswith("V"),
            base_flood_elevation=bfe,
            firm_panel_number=panel_id,
        )

    if "X-SHADED" in zone or zone in ("X500", "B"):
        return FloodZoneInfo(
            zone="X-Shaded",
            is_flood_zone=True,
            requires_elevation_certificate=False,
            firm_panel_number=panel_id,
        )

    return FloodZoneInfo(
        zone="X",
        is_flood_zone=False,
        requires_elevation_certificate=False,
        firm_panel_number=panel_id,
    )


def coastal_wind_zone(longitude: float) -> CoastalInfo:
    """Design wind speed for the site (ASCE 7 simplification)."""
    if longitude < geo_tables.COASTAL_WIND_LONGITUDE:
        return CoastalInfo(
            is_coastal=True,
            design_wind_speed_mph=150,
            requires_wind_calculation=True,
            wind_zone_label="Zone 1 (Coastal)",
        )
    return CoastalInfo(
        is_coastal=False,
        design_wind_speed_mph=130,
        requires_wind_calculation=False,
        wind_zone_label="Zone 2 (Inland)",
    )


def _lower(confidence: Confidence) -> Confidence:
    index = _CONFIDENCE_STEPS.index(confidence)
    return _CONFIDENCE_STEPS[min(index + 1, len(_CONFIDENCE_STEPS) - 1)]


def _slug(city: str) -> str:
    return _SLUG_CHARS.sub("-", city.strip().lower()).strip("-")


class LocationIntelligence:
    """Analyzes job sites against the regional knowledge base.

    Args:
        geocoder: Address resolver. ``None`` skips straight to the city
            centroid table.
        flood_provider: Flood-hazard lookup. ``None`` uses the waterfront
            heuristic for every site.
        knowledge_base: Static tables; defaults to the built-in Tampa Bay
            data.
    """

    def __init__(
        self,
        geocoder: Geocoder | None = None,
        flood_provider: FloodZoneProvider | None = None,
        knowledge_base: GeoKnowledgeBase | None = None,
    ) -> None:
        self._geocoder = geocoder
        self._flood_provider = flood_provider
        self._kb = knowledge_base or GeoKnowledgeBase()

    def analyze(
        self,
        address: str,
        city: str,
        state: str,
        zip_code: str,
    ) -> LocationAnalysis:
        """Produce a complete location analysis. Never raises for bad input."""
        warnings: list[str] = []
        full_address = f"{address}, {city}, {state} {zip_code}"
        logger.info("Analyzing location: %s", full_address)

        coordinates, confidence = self._resolve_coordinates(
            full_address, city, warnings
        )

        county = self._kb.county_for_city(city)
        if county is None:
            county = self._kb.default_county
            warnings.append(
                f"Unrecognized city '{city}': assuming {county.title()} County"
            )

        jurisdiction = self._determine_jurisdiction(city, county)

        flood_zone, flood_degraded = self._determine_flood_zone(coordinates, warnings)
        if flood_degraded:
            confidence = _lower(confidence)

        coastal = coastal_wind_zone(coordinates.longitude)
        height = self._check_height_restriction(coordinates)
        districts = self._check_special_districts(city, county, coordinates)

        forms = self._additional_forms(jurisdiction, flood_zone, coastal, height, districts)
        warnings.extend(self._site_warnings(flood_zone, height, districts))

        return LocationAnalysis(
            address=SiteAddress(
                street=address,
                city=city,
                county=county,
                state=state,
                zip_code=zip_code,
                coordinates=coordinates,
            ),
            jurisdiction=jurisdiction,
            flood_zone=flood_zone,
            coastal=coastal,
            height_restriction=height,
            special_districts=districts,
            additional_forms=forms,
            confidence=confidence,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------

    def _resolve_coordinates(
        self,
        full_address: str,
        city: str,
        warnings: list[str],
    ) -> tuple[Coordinates, Confidence]:
        if self._geocoder is not None:
            try:
                coordinates = self._geocoder.geocode(full_address)
            except ProviderError:
                logger.exception("Geocoding failed for %s", full_address)
                coordinates = None
            if coordinates is not None:
                return coordinates, Confidence.HIGH

        centroid = self._kb.city_coordinates(city)
        if centroid is not None:
            logger.warning("Using city centroid for %s", city)
            warnings.append(
                f"Address could not be geocoded precisely; using the {city} "
                f"city center for site checks"
            )
            return Coordinates(latitude=centroid[0], longitude=centroid[1]), Confidence.MEDIUM

        logger.warning("No coordinates for %s, using regional default", city)
        warnings.append(
            "Address could not be located; using the regional default point. "
            "Verify flood zone and height restrictions manually."
        )
        lat, lng = self._kb.region_default
        return Coordinates(latitude=lat, longitude=lng), Confidence.LOW

    # ------------------------------------------------------------------
    # Jurisdiction
    # ------------------------------------------------------------------

    def _determine_jurisdiction(self, city: str, county: County) -> JurisdictionInfo:
        office = self._kb.permit_office_for_city(city)
        if office is not None:
            return JurisdictionInfo(
                type=JurisdictionType.INCORPORATED,
                primary_authority=f"{county}-county",
                secondary_authority=f"city-of-{_slug(city)}",
                permit_office=office,
            )
        return JurisdictionInfo(
            type=JurisdictionType.UNINCORPORATED,
            primary_authority=f"{county}-county",
            permit_office=f"{county.title()} County Development Services",
        )

    # ------------------------------------------------------------------
    # Flood zone
    # ------------------------------------------------------------------

    def _determine_flood_zone(
        self,
        coordinates: Coordinates,
        warnings: list[str],
    ) -> tuple[FloodZoneInfo, bool]:
        """Return the flood zone and whether the fallback heuristic was used."""
        lat, lng = coordinates.latitude, coordinates.longitude
        if self._flood_provider is not None:
            try:
                result = self._flood_provider.lookup_flood_zone(lat, lng)
            except ProviderError:
                logger.exception("Flood zone lookup failed at (%s, %s)", lat, lng)
            else:
                if result is None:
                    return interpret_flood_zone("X"), False
                return interpret_flood_zone(result.zone_code, result.panel_id), False

        warnings.append(
            "FEMA flood data unavailable; flood zone estimated from "
            "waterfront proximity. Verify on the FEMA Flood Map Service Center."
        )
        return self._estimate_flood_zone(lat, lng), True

    def _estimate_flood_zone(self, latitude: float, longitude: float) -> FloodZoneInfo:
        region = self._kb.waterfront_region(latitude, longitude)
        if region is not None:
            logger.warning("Estimating flood zone AE (%s)", region.name)
            return interpret_flood_zone("AE")
        return interpret_flood_zone("X")

    # ------------------------------------------------------------------
    # Height and special districts
    # ------------------------------------------------------------------

    def _check_height_restriction(self, coordinates: Coordinates) -> HeightRestrictionInfo:
        nearest = self._kb.nearest_airport(coordinates.latitude, coordinates.longitude)
        if nearest is None:
            return HeightRestrictionInfo(has_restriction=False)
        airport, distance = nearest
        return HeightRestrictionInfo(
            has_restriction=True,
            max_height_ft=airport.max_height_ft,
            reason=RestrictionReason.AIRPORT,
            nearby_landmark=airport.name,
            distance_miles=round(distance, 1),
        )

    def _check_special_districts(
        self,
        city: str,
        county: County,
        coordinates: Coordinates,
    ) -> SpecialDistrictInfo:
        reasons: list[str] = []

        historic = self._kb.is_historic_city(city)
        if historic:
            reasons.append("Property may be in historic district - verify with city")

        has_hoa = self._kb.is_hoa_heavy(city, county)
        if has_hoa:
            reasons.extend([
                "PASCO COUNTY: This area typically has HOA restrictions",
                "CHECK HOA: Many HOAs require approval BEFORE permit application",
                "VERIFY: HOA may restrict equipment placement, screening, noise levels",
            ])

        environmental = False
        if coordinates.longitude < geo_tables.ENVIRONMENTAL_REVIEW_LONGITUDE:
            environmental = True
            reasons.append("Coastal area - may require environmental review")

        if self._kb.requires_coastal_review(city, county):
            environmental = True
            reasons.extend([
                "WEST PASCO: Coastal zone with additional wind and flood requirements",
                "WIND LOAD: 140 mph design wind speed required",
            ])

        return SpecialDistrictInfo(
            historic=historic,
            has_hoa=has_hoa,
            environmental_review=environmental,
            reasons=reasons,
        )

    # ------------------------------------------------------------------
    # Derived forms and warnings
    # ------------------------------------------------------------------

    @staticmethod
    def _additional_forms(
        jurisdiction: JurisdictionInfo,
        flood_zone: FloodZoneInfo,
        coastal: CoastalInfo,
        height: HeightRestrictionInfo,
        districts: SpecialDistrictInfo,
    ) -> list[str]:
        forms: list[str] = []
        if jurisdiction.secondary_authority:
            forms.append(f"{jurisdiction.secondary_authority}-addendum")
        if flood_zone.requires_elevation_certificate:
            forms.append("fema-elevation-certificate")
        if coastal.requires_wind_calculation:
            forms.append("wind-load-calculation")
        if height.has_restriction and height.reason is RestrictionReason.AIRPORT:
            forms.append("faa-height-notification")
        if districts.historic:
            forms.append("historic-preservation-review")
        return forms

    @staticmethod
    def _site_warnings(
        flood_zone: FloodZoneInfo,
        height: HeightRestrictionInfo,
        districts: SpecialDistrictInfo,
    ) -> list[str]:
        warnings: list[str] = []
        if flood_zone.is_flood_zone:
            warnings.append(
                f"FLOOD ZONE {flood_zone.zone}: This property is in a FEMA flood zone."
            )
        if flood_zone.requires_elevation_certificate:
            warnings.append(
                "ELEVATION CERTIFICATE REQUIRED: Must be completed by licensed surveyor."
            )
        if flood_zone.coastal_high_hazard:
            warnings.append(
                "COASTAL HIGH HAZARD: V-zone construction standards apply to "
                "outdoor equipment."
            )
        if height.has_restriction:
            warnings.append(
                f"HEIGHT RESTRICTION: Maximum {height.max_height_ft:g} feet due to "
                f"proximity to {height.nearby_landmark}"
            )
        if districts.historic:
            warnings.append(
                "HISTORIC DISTRICT: May require approval from Historic Preservation Board."
            )
        if districts.environmental_review:
            warnings.append(
                "COASTAL AREA: May require environmental review for wetlands/coastal impact."
            )
        return warnings
