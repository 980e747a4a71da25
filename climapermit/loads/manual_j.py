"""ACCA Manual J style residential load calculation.

Unlike the simplified calculator this one models the envelope:

1. **Design conditions**: ASHRAE summer/winter temperatures for the county.
2. **Envelope**: a 1.3:1 rectangular footprint per story gives wall,
   window, door, and ceiling areas.
3. **Thermal properties**: U-values, window SHGC, and ACH50 keyed to
   construction year or stated insulation quality.
4. **Sensible gains**: ``Q = U x A x dT`` per component, roof and window
   solar gain, slab gain, infiltration, internal gains, and a 15% duct gain.
5. **Latent gains**: infiltration moisture, occupants, and appliances.
6. **Heating load**: the same envelope at winter design dT.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from climapermit.loads.base import (
    DEFAULT_CEILING_HEIGHT_FT,
    MAX_TONNAGE_FACTOR,
    MIN_TONNAGE_FACTOR,
    PERFECT_MATCH_TONS,
    btu_to_tons,
    round_tons,
)
from climapermit.loads.climate import design_conditions_for
from climapermit.models.enums import (
    CalculatorVariant,
    Confidence,
    EquipmentMatch,
    InsulationQuality,
)
from climapermit.models.load import LoadCalculationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from climapermit.loads.climate import DesignConditions
    from climapermit.models.load import BuildingInput

METHODOLOGY = "ACCA Manual J 8th Edition - Residential Load Calculation"

FOOTPRINT_ASPECT_RATIO = 1.3
WINDOW_FRACTION = 0.15
WINDOW_FRACTION_PRE_1980 = 0.12
DOOR_COUNT = 2.5
DOOR_AREA_SQFT = 20.0

ROOF_SOLAR_FACTOR = 1.3  # dark roof in sun
SOLAR_INTENSITY = 180.0  # BTU/hr·ft², mixed orientations
SLAB_GAIN_PER_SQFT = 2.0
ACH50_TO_NATURAL = 20.0
SENSIBLE_AIR_FACTOR = 1.1
LATENT_AIR_FACTOR = 0.68
DUCT_GAIN_FRACTION = 0.15

SQFT_PER_BEDROOM = 500
PERSON_SENSIBLE_BTU = 250
PERSON_LATENT_BTU = 200
APPLIANCE_BTU_PER_SQFT = 1.5
LIGHTING_BTU_PER_SQFT = 1.0
APPLIANCE_LATENT_BTU = 1200

ACCEPTABLE_MATCH_TONS = 0.6
LEAKY_ACH50 = 10.0
AIR_SEALING_ACH50 = 7.0
TARGET_CEILING_U = 0.026  # R-38


@dataclass(frozen=True)
class Envelope:
    """Building envelope areas (ft²) and conditioned volume (ft³)."""

    footprint: float
    perimeter: float
    wall_area: float
    window_area: float
    door_area: float
    ceiling_area: float
    volume: float


@dataclass(frozen=True)
class ThermalProperties:
    """U-values in BTU/hr·ft²·°F, window SHGC, and ACH50 air tightness."""

    wall_u: float
    ceiling_u: float
    window_u: float
    window_shgc: float
    ach50: float
    door_u: float = 0.50


# 2009+ Florida Building Code: R-13 + R-5 ci walls, R-38 attic, low-E glass.
MODERN = ThermalProperties(0.057, 0.026, 0.35, 0.25, 5.0)
# 2000s: R-13 walls, R-30 attic, double pane.
GOOD = ThermalProperties(0.065, 0.030, 0.50, 0.30, 7.0)
# 1990s: R-11 walls, R-26 attic, standard double pane.
AVERAGE = ThermalProperties(0.079, 0.038, 0.60, 0.40, 9.0)
# Pre-1990: R-7 walls, R-19 attic, single pane clear glass, leaky.
POOR = ThermalProperties(0.110, 0.053, 0.89, 0.60, 12.0)

_TIERS_BY_QUALITY: Mapping[InsulationQuality, ThermalProperties] = MappingProxyType({
    InsulationQuality.EXCELLENT: MODERN,
    InsulationQuality.GOOD: GOOD,
    InsulationQuality.AVERAGE: AVERAGE,
    InsulationQuality.FAIR: AVERAGE,
    InsulationQuality.POOR: POOR,
})


def envelope_for(building: BuildingInput) -> Envelope:
    sqft = building.square_footage
    height = building.ceiling_height_ft or DEFAULT_CEILING_HEIGHT_FT
    stories = building.stories or 1

    footprint = sqft / stories
    length = math.sqrt(footprint * FOOTPRINT_ASPECT_RATIO)
    width = footprint / length
    perimeter = 2 * (length + width)
    gross_wall = perimeter * height * stories

    fraction = WINDOW_FRACTION_PRE_1980 if building.year_built < 1980 else WINDOW_FRACTION
    window_area = gross_wall * fraction
    door_area = DOOR_COUNT * DOOR_AREA_SQFT

    return Envelope(
        footprint=footprint,
        perimeter=perimeter,
        wall_area=max(0.0, gross_wall - window_area - door_area),
        window_area=window_area,
        door_area=door_area,
        ceiling_area=sqft,
        volume=sqft * height,
    )


def thermal_properties_for(
    year_built: int, quality: InsulationQuality | None
) -> ThermalProperties:
    """Stated insulation quality wins; otherwise the construction year decides."""
    if quality is not None:
        return _TIERS_BY_QUALITY[quality]
    if year_built >= 2010:
        return MODERN
    if year_built >= 2000:
        return GOOD
    if year_built >= 1990:
        return AVERAGE
    return POOR


def occupants_for(building: BuildingInput) -> int:
    bedrooms = building.bedrooms or math.ceil(building.square_footage / SQFT_PER_BEDROOM)
    return bedrooms + 1


def infiltration_cfm(envelope: Envelope, thermal: ThermalProperties) -> float:
    natural_ach = thermal.ach50 / ACH50_TO_NATURAL
    return envelope.volume * natural_ach / 60


def sensible_gains(
    building: BuildingInput,
    envelope: Envelope,
    thermal: ThermalProperties,
    conditions: DesignConditions,
) -> dict[str, int]:
    dt = conditions.cooling_delta_t

    walls = thermal.wall_u * envelope.wall_area * dt
    ceiling = thermal.ceiling_u * envelope.ceiling_area * dt * ROOF_SOLAR_FACTOR
    doors = thermal.door_u * envelope.door_area * dt
    windows = (
        thermal.window_u * envelope.window_area * dt
        + thermal.window_shgc * envelope.window_area * SOLAR_INTENSITY
    )
    floor = envelope.footprint * SLAB_GAIN_PER_SQFT
    infiltration = SENSIBLE_AIR_FACTOR * infiltration_cfm(envelope, thermal) * dt

    internal = (
        occupants_for(building) * PERSON_SENSIBLE_BTU
        + building.square_footage * APPLIANCE_BTU_PER_SQFT
        + building.square_footage * LIGHTING_BTU_PER_SQFT
    )
    duct = (walls + windows + ceiling + floor + infiltration) * DUCT_GAIN_FRACTION

    return {
        "walls": round(walls),
        "windows": round(windows),
        "ceiling": round(ceiling),
        "floor": round(floor),
        "doors": round(doors),
        "infiltration": round(infiltration),
        "internal_gains": round(internal),
        "duct_gain": round(duct),
    }


def latent_gains(
    building: BuildingInput,
    envelope: Envelope,
    thermal: ThermalProperties,
    conditions: DesignConditions,
) -> dict[str, int]:
    infiltration = (
        LATENT_AIR_FACTOR
        * infiltration_cfm(envelope, thermal)
        * conditions.humidity_delta
        * 1000
    )
    return {
        "infiltration_latent": round(infiltration),
        "occupant_latent": occupants_for(building) * PERSON_LATENT_BTU,
        "appliance_latent": APPLIANCE_LATENT_BTU,
    }


def heating_load(
    envelope: Envelope,
    thermal: ThermalProperties,
    conditions: DesignConditions,
) -> float:
    dt = conditions.heating_delta_t
    walls = thermal.wall_u * envelope.wall_area * dt
    windows = thermal.window_u * envelope.window_area * dt
    ceiling = thermal.ceiling_u * envelope.ceiling_area * dt
    doors = thermal.door_u * envelope.door_area * dt
    infiltration = SENSIBLE_AIR_FACTOR * infiltration_cfm(envelope, thermal) * dt
    duct = (walls + windows + ceiling + infiltration) * DUCT_GAIN_FRACTION
    return walls + windows + ceiling + doors + infiltration + duct


def evaluate_match(equipment_tonnage: float | None, recommended: float) -> EquipmentMatch:
    if not equipment_tonnage:
        return EquipmentMatch.ACCEPTABLE
    diff = abs(equipment_tonnage - recommended)
    if diff < PERFECT_MATCH_TONS:
        return EquipmentMatch.PERFECT
    if diff < ACCEPTABLE_MATCH_TONS:
        return EquipmentMatch.ACCEPTABLE
    if equipment_tonnage > recommended:
        return EquipmentMatch.OVERSIZED
    return EquipmentMatch.UNDERSIZED


class ManualJLoadCalculator:
    """Envelope-physics calculator. Results are always high confidence."""

    variant = CalculatorVariant.DETAILED

    def calculate(self, building: BuildingInput) -> LoadCalculationResult:
        conditions = design_conditions_for(building.county)
        envelope = envelope_for(building)
        thermal = thermal_properties_for(building.year_built, building.insulation)

        sensible = sensible_gains(building, envelope, thermal, conditions)
        latent = latent_gains(building, envelope, thermal, conditions)
        total_sensible = sum(sensible.values())
        total_latent = sum(latent.values())
        total_cooling = total_sensible + total_latent

        recommended = btu_to_tons(total_cooling)
        match = evaluate_match(building.equipment_tonnage, recommended)

        return LoadCalculationResult(
            calculator=self.variant,
            recommended_tonnage=round_tons(recommended),
            min_tonnage=round_tons(recommended * MIN_TONNAGE_FACTOR),
            max_tonnage=round_tons(recommended * MAX_TONNAGE_FACTOR),
            total_btu_load=total_cooling,
            sensible_load=total_sensible,
            latent_load=total_latent,
            heating_load=round(heating_load(envelope, thermal, conditions)),
            equipment_match=match,
            confidence_level=Confidence.HIGH,
            methodology=METHODOLOGY,
            breakdown={**sensible, **latent},
            assumptions={
                "wall_area": round(envelope.wall_area, 1),
                "window_area": round(envelope.window_area, 1),
                "door_area": envelope.door_area,
                "ceiling_area": envelope.ceiling_area,
                "wall_u_value": thermal.wall_u,
                "window_u_value": thermal.window_u,
                "window_shgc": thermal.window_shgc,
                "ceiling_u_value": thermal.ceiling_u,
                "ach50": thermal.ach50,
                "summer_outdoor_f": conditions.summer_outdoor_f,
                "summer_indoor_f": conditions.summer_indoor_f,
                "winter_outdoor_f": conditions.winter_outdoor_f,
                "winter_indoor_f": conditions.winter_indoor_f,
            },
            warnings=self._warnings(building, match, thermal),
            recommendations=self._recommendations(envelope, thermal),
        )

    @staticmethod
    def _warnings(
        building: BuildingInput,
        match: EquipmentMatch,
        thermal: ThermalProperties,
    ) -> list[str]:
        warnings: list[str] = []
        tonnage = building.equipment_tonnage
        if match is EquipmentMatch.OVERSIZED:
            warnings.append(
                f"Equipment is oversized ({tonnage:g} ton). Oversizing causes "
                "short-cycling, poor dehumidification, and comfort issues."
            )
        if match is EquipmentMatch.UNDERSIZED:
            warnings.append(
                f"Equipment may be undersized ({tonnage:g} ton). Unit may "
                "struggle during peak heat days."
            )
        if thermal.ach50 > LEAKY_ACH50:
            warnings.append(
                "High air leakage detected. Air sealing improvements could "
                "reduce load by 15-20%."
            )
        if building.year_built < 1980:
            warnings.append(
                "Pre-1980 construction typically has minimal insulation. "
                "Consider energy audit for upgrade opportunities."
            )
        return warnings

    @staticmethod
    def _recommendations(envelope: Envelope, thermal: ThermalProperties) -> list[str]:
        recommendations: list[str] = []
        if thermal.ceiling_u > 0.03:
            savings = round(envelope.ceiling_area * (thermal.ceiling_u - TARGET_CEILING_U) * 18)
            recommendations.append(
                f"Attic insulation to R-38 could reduce cooling load by {savings} BTU/hr."
            )
        if thermal.window_u > 0.40:
            recommendations.append(
                "Low-E window upgrades could reduce cooling load by 10-15% and "
                "improve comfort."
            )
        if thermal.ach50 > AIR_SEALING_ACH50:
            recommendations.append(
                "Air sealing (weatherstripping, caulking) typical ROI: 1-2 years "
                "in Florida."
            )
        recommendations.append(
            "Proper duct sealing and insulation saves 20-30% on energy bills."
        )
        recommendations.append(
            "Programmable thermostat can reduce runtime by 10-15% with no comfort loss."
        )
        return recommendations
