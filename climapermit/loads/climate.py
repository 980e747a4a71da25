"""Florida climate data for the load calculators.

Regions are matched by keyword against free-text city and county names,
so ``"Miami-Dade County"`` and ``"miami-dade"`` both land in the south zone.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClimateZone:
    """Rule-of-thumb cooling multiplier for a Florida region."""

    key: str
    name: str
    factor: float


@dataclass(frozen=True)
class DesignConditions:
    """ASHRAE design temperatures (°F) and humidity ratios (lb water/lb air).

    Summer values are 0.4% design dry bulb, winter values 99% design.
    """

    summer_outdoor_f: float
    summer_indoor_f: float
    winter_outdoor_f: float
    winter_indoor_f: float
    summer_humidity_ratio: float
    indoor_humidity_ratio: float

    @property
    def cooling_delta_t(self) -> float:
        return self.summer_outdoor_f - self.summer_indoor_f

    @property
    def heating_delta_t(self) -> float:
        return self.winter_indoor_f - self.winter_outdoor_f

    @property
    def humidity_delta(self) -> float:
        return self.summer_humidity_ratio - self.indoor_humidity_ratio


NORTH_FLORIDA = ClimateZone("north", "North Florida (Zone 2)", 1.10)
CENTRAL_FLORIDA = ClimateZone("central", "Central Florida (Zone 1)", 1.15)
SOUTH_FLORIDA = ClimateZone("south", "South Florida (Zone 1)", 1.20)

_NORTH_COUNTIES = ("duval", "nassau")
_NORTH_CITIES = ("jacksonville", "tallahassee")
_SOUTH_COUNTIES = ("miami-dade", "broward", "palm beach")
_SOUTH_CITIES = ("miami", "fort lauderdale")

TAMPA_BAY_CONDITIONS = DesignConditions(
    summer_outdoor_f=93,
    summer_indoor_f=75,
    winter_outdoor_f=38,
    winter_indoor_f=70,
    summer_humidity_ratio=0.0146,
    indoor_humidity_ratio=0.0093,  # 50% RH at 75°F
)
DEFAULT_CONDITIONS = DesignConditions(
    summer_outdoor_f=94,
    summer_indoor_f=75,
    winter_outdoor_f=40,
    winter_indoor_f=70,
    summer_humidity_ratio=0.0148,
    indoor_humidity_ratio=0.0093,
)
_TAMPA_BAY_COUNTIES = ("hillsborough", "pasco", "pinellas")


def climate_zone_for(city: str, county: str) -> ClimateZone:
    """Pick the climate zone; central Florida when nothing matches."""
    city_l = city.lower()
    county_l = county.lower()
    if any(k in county_l for k in _NORTH_COUNTIES) or any(
        k in city_l for k in _NORTH_CITIES
    ):
        return NORTH_FLORIDA
    if any(k in county_l for k in _SOUTH_COUNTIES) or any(
        k in city_l for k in _SOUTH_CITIES
    ):
        return SOUTH_FLORIDA
    return CENTRAL_FLORIDA


def design_conditions_for(county: str) -> DesignConditions:
    county_l = county.lower()
    if any(k in county_l for k in _TAMPA_BAY_COUNTIES):
        return TAMPA_BAY_CONDITIONS
    return DEFAULT_CONDITIONS
