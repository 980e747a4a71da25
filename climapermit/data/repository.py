"""Lookup repositories over the static geographic and county tables."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING

from climapermit.data import counties, geo_tables
from climapermit.geodesy import haversine_miles
from climapermit.models.requirements import FeeEstimate

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from climapermit.data.counties import CountyPermitProfile
    from climapermit.data.geo_tables import Airport, WaterfrontRegion
    from climapermit.models.enums import County, EquipmentType

_WHITESPACE = re.compile(r"\s+")


def normalize_city(city: str) -> str:
    """Lowercase, trim, and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", city.strip().lower())


class GeoKnowledgeBase:
    """Read-only view over the city, county, and hazard tables.

    Every table defaults to the built-in Tampa Bay data; pass replacements to
    serve other regions. Inputs are copied into read-only mappings, so a
    knowledge base can be shared between threads.
    """

    def __init__(
        self,
        city_coordinates: Mapping[str, tuple[float, float]] = geo_tables.CITY_COORDINATES,
        city_counties: Mapping[str, County] = geo_tables.CITY_COUNTIES,
        incorporated_cities: Mapping[str, str] = geo_tables.INCORPORATED_CITIES,
        airports: Iterable[Airport] = geo_tables.AIRPORTS,
        historic_cities: Iterable[str] = geo_tables.HISTORIC_CITIES,
        hoa_heavy_cities: Mapping[County, Iterable[str]] = geo_tables.HOA_HEAVY_CITIES,
        coastal_review_cities: Mapping[County, Iterable[str]] = geo_tables.COASTAL_REVIEW_CITIES,
        waterfront_regions: Iterable[WaterfrontRegion] = geo_tables.WATERFRONT_REGIONS,
        default_county: County = geo_tables.DEFAULT_COUNTY,
        region_default: tuple[float, float] = geo_tables.REGION_DEFAULT_COORDINATES,
        airport_radius_miles: float = geo_tables.AIRPORT_RADIUS_MILES,
    ) -> None:
        self._city_coordinates = MappingProxyType(
            {normalize_city(k): v for k, v in city_coordinates.items()}
        )
        self._city_counties = MappingProxyType(
            {normalize_city(k): v for k, v in city_counties.items()}
        )
        self._incorporated = MappingProxyType(
            {normalize_city(k): v for k, v in incorporated_cities.items()}
        )
        self._airports = tuple(airports)
        self._historic = frozenset(normalize_city(c) for c in historic_cities)
        self._hoa_heavy = MappingProxyType({
            county: frozenset(normalize_city(c) for c in cities)
            for county, cities in hoa_heavy_cities.items()
        })
        self._coastal_review = MappingProxyType({
            county: frozenset(normalize_city(c) for c in cities)
            for county, cities in coastal_review_cities.items()
        })
        self._waterfront_regions = tuple(waterfront_regions)
        self.default_county = default_county
        self.region_default = region_default
        self.airport_radius_miles = airport_radius_miles

    def city_coordinates(self, city: str) -> tuple[float, float] | None:
        return self._city_coordinates.get(normalize_city(city))

    def county_for_city(self, city: str) -> County | None:
        return self._city_counties.get(normalize_city(city))

    def permit_office_for_city(self, city: str) -> str | None:
        """Return the city permit office, or None if the city is unincorporated."""
        return self._incorporated.get(normalize_city(city))

    def nearest_airport(
        self, latitude: float, longitude: float
    ) -> tuple[Airport, float] | None:
        """Nearest airport within the screening radius, with its distance."""
        best: tuple[Airport, float] | None = None
        for airport in self._airports:
            distance = haversine_miles(
                latitude, longitude, airport.latitude, airport.longitude
            )
            if distance >= self.airport_radius_miles:
                continue
            if best is None or distance < best[1]:
                best = (airport, distance)
        return best

    def is_historic_city(self, city: str) -> bool:
        return normalize_city(city) in self._historic

    def is_hoa_heavy(self, city: str, county: County) -> bool:
        return normalize_city(city) in self._hoa_heavy.get(county, frozenset())

    def requires_coastal_review(self, city: str, county: County) -> bool:
        return normalize_city(city) in self._coastal_review.get(county, frozenset())

    def waterfront_region(
        self, latitude: float, longitude: float
    ) -> WaterfrontRegion | None:
        for region in self._waterfront_regions:
            if region.contains(latitude, longitude):
                return region
        return None


class CountyPermitRepository:
    """Looks up county permit office profiles, fees, and document lists."""

    def __init__(
        self,
        profiles: Mapping[County, CountyPermitProfile] = counties.COUNTY_PROFILES,
        default_county: County = counties.DEFAULT_PROFILE_COUNTY,
    ) -> None:
        self._profiles = MappingProxyType(dict(profiles))
        if default_county not in self._profiles:
            msg = f"Default county '{default_county}' has no permit profile"
            raise ValueError(msg)
        self._default_county = default_county

    def get_profile(self, county: County) -> tuple[CountyPermitProfile, list[str]]:
        """Return the county's profile and any fallback reasons.

        Counties without a profile borrow the default county's.
        """
        profile = self._profiles.get(county)
        if profile is not None:
            return profile, []
        fallback = self._profiles[self._default_county]
        reason = (
            f"No permit profile for {county} county; "
            f"fees and documents are based on {fallback.name}"
        )
        return fallback, [reason]

    @staticmethod
    def describe(jurisdiction_code: str) -> str:
        return counties.PERMIT_DESCRIPTIONS.get(
            jurisdiction_code, counties.DEFAULT_PERMIT_DESCRIPTION
        )

    @staticmethod
    def estimate_valuation(
        equipment_type: EquipmentType,
        tonnage: float | None,
        new_installation: bool,
    ) -> float:
        """Estimate job value from equipment type, tonnage, and job type."""
        valuation = counties.EQUIPMENT_BASE_VALUATIONS.get(
            equipment_type, counties.DEFAULT_VALUATION
        )
        if tonnage:
            valuation += tonnage * counties.VALUATION_PER_TON
        if new_installation:
            valuation *= counties.NEW_INSTALLATION_VALUATION_FACTOR
        return float(round(valuation))

    @staticmethod
    def estimate_fees(
        profile: CountyPermitProfile,
        jurisdiction_code: str,
        valuation: float,
        expedited: bool = False,
    ) -> FeeEstimate:
        """Compute the permit fee estimate for a job valuation.

        Base fee by permit code, plus 1% of valuation above the threshold
        (capped), plus fixed inspection and technology fees, plus plan review
        for larger jobs and the optional expedite fee.
        """
        schedule = profile.fee_schedule
        base_fee = schedule.base_fees.get(jurisdiction_code, schedule.default_base_fee)

        valuation_fee = 0.0
        if valuation > schedule.valuation_threshold:
            valuation_fee = min(
                (valuation - schedule.valuation_threshold) * schedule.valuation_rate,
                schedule.valuation_fee_cap,
            )

        additional: dict[str, float] = {
            "inspection": schedule.inspection_fee,
            "technology": schedule.technology_fee,
        }
        if valuation > schedule.plan_review_threshold:
            additional["plan_review"] = schedule.plan_review_fee
        if expedited:
            additional["expedited_processing"] = schedule.expedited_fee

        total = round(base_fee + valuation_fee + sum(additional.values()), 2)
        return FeeEstimate(
            base_fee=base_fee,
            valuation_fee=round(valuation_fee, 2),
            additional_fees=additional,
            total=total,
            valuation=valuation,
        )

    @staticmethod
    def required_documents(
        profile: CountyPermitProfile, jurisdiction_code: str
    ) -> list[str]:
        specific = profile.documents_by_code.get(jurisdiction_code, [])
        return [*profile.universal_documents, *specific]

    @staticmethod
    def processing_days(
        profile: CountyPermitProfile,
        jurisdiction_code: str,
        expedited: bool = False,
    ) -> int:
        times = profile.processing_times
        if expedited:
            return times.expedited
        # Like-for-like residential replacements are issued over the counter.
        if jurisdiction_code == "BLD-HVAC-RES-REPL":
            return times.same_day
        return times.standard
