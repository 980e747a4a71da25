"""Rule-of-thumb cooling load for Florida residences.

The calculation starts from 18 BTU/hr per square foot and adds percentage
adjustments of that base:

1. **Climate**: north, central, or south Florida multiplier.
2. **Insulation**: keyed to construction decade, or to the stated
   insulation quality.
3. **Ceiling height**: 2% per foot above 8 ft.
4. **Windows**: glazing quality, or estimated from construction year.

Tonnage is the total divided by 12,000, with an acceptable equipment range
of -10% / +15%.
"""

from __future__ import annotations

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
from climapermit.loads.climate import climate_zone_for
from climapermit.models.enums import (
    CalculatorVariant,
    Confidence,
    EquipmentMatch,
    InsulationQuality,
    WindowQuality,
)
from climapermit.models.load import LoadCalculationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from climapermit.models.load import BuildingInput

BASE_BTU_PER_SQFT = 18.0
CEILING_SURCHARGE_PER_FT = 0.02
LARGE_HOME_SQFT = 3500
OLD_HOME_YEAR = 1970
POOR_INSULATION_YEAR = 1980
OLD_WINDOWS_YEAR = 1990

METHODOLOGY = "ACCA Manual J (Simplified) - Florida Residential"


@dataclass(frozen=True)
class InsulationBand:
    label: str
    r_value: str
    factor: float
    quality: InsulationQuality


_BEFORE_1980 = InsulationBand("before 1980", "R-11 or less", 1.20, InsulationQuality.POOR)
_1980S = InsulationBand("1980s", "R-19 typical", 1.10, InsulationQuality.FAIR)
_1990S = InsulationBand("1990s", "R-30 typical", 1.05, InsulationQuality.FAIR)
_2000S = InsulationBand("2000s", "R-38 typical", 1.00, InsulationQuality.GOOD)
_2010S = InsulationBand("2010s", "R-49+ typical", 0.95, InsulationQuality.EXCELLENT)

_BANDS_BY_QUALITY: Mapping[InsulationQuality, InsulationBand] = MappingProxyType({
    InsulationQuality.POOR: _BEFORE_1980,
    InsulationQuality.FAIR: _1990S,
    InsulationQuality.GOOD: _2000S,
    InsulationQuality.EXCELLENT: _2010S,
})

_WINDOW_FACTORS: Mapping[WindowQuality, float] = MappingProxyType({
    WindowQuality.LOW_E: -0.05,
    WindowQuality.DOUBLE: 0.0,
    WindowQuality.SINGLE: 0.10,
})


def insulation_band(year_built: int, quality: InsulationQuality | None) -> InsulationBand:
    if quality is not None:
        return _BANDS_BY_QUALITY.get(quality, _1990S)
    if year_built < 1980:
        return _BEFORE_1980
    if year_built < 1990:
        return _1980S
    if year_built < 2000:
        return _1990S
    if year_built < 2010:
        return _2000S
    return _2010S


def window_factor(year_built: int, quality: WindowQuality | None) -> float:
    if quality is not None:
        return _WINDOW_FACTORS[quality]
    # Older homes likely have single pane glass.
    if year_built < 1990:
        return 0.08
    if year_built < 2010:
        return 0.02
    return -0.02


def evaluate_match(
    equipment_tonnage: float | None,
    recommended: float,
    minimum: float,
    maximum: float,
) -> EquipmentMatch:
    if not equipment_tonnage:
        return EquipmentMatch.ACCEPTABLE
    if abs(equipment_tonnage - recommended) < PERFECT_MATCH_TONS:
        return EquipmentMatch.PERFECT
    if minimum <= equipment_tonnage <= maximum:
        return EquipmentMatch.ACCEPTABLE
    if equipment_tonnage > maximum:
        return EquipmentMatch.OVERSIZED
    return EquipmentMatch.UNDERSIZED


def assess_confidence(building: BuildingInput) -> Confidence:
    """Score confidence from how much optional data was supplied."""
    score = 0
    if building.ceiling_height_ft:
        score += 1
    if building.insulation is not None:
        score += 1
    if building.window_quality is not None:
        score += 1
    if building.year_built < OLD_HOME_YEAR:
        score -= 1
    if building.square_footage > LARGE_HOME_SQFT:
        score -= 1

    if score >= 2:
        return Confidence.HIGH
    if score >= 0:
        return Confidence.MEDIUM
    return Confidence.LOW


class SimplifiedLoadCalculator:
    """Square-foot rule-of-thumb calculator. Needs no coordinates."""

    variant = CalculatorVariant.SIMPLIFIED

    def calculate(self, building: BuildingInput) -> LoadCalculationResult:
        ceiling_height = building.ceiling_height_ft or DEFAULT_CEILING_HEIGHT_FT
        base_load = building.square_footage * BASE_BTU_PER_SQFT

        zone = climate_zone_for(building.city, building.county)
        climate_adjustment = base_load * (zone.factor - 1)

        band = insulation_band(building.year_built, building.insulation)
        insulation_adjustment = base_load * (band.factor - 1)

        ceiling_factor = (
            (ceiling_height - DEFAULT_CEILING_HEIGHT_FT) * CEILING_SURCHARGE_PER_FT
            if ceiling_height > DEFAULT_CEILING_HEIGHT_FT
            else 0.0
        )
        ceiling_adjustment = base_load * ceiling_factor

        windows = window_factor(building.year_built, building.window_quality)
        window_adjustment = base_load * windows

        total_btu = round(
            base_load
            + climate_adjustment
            + insulation_adjustment
            + ceiling_adjustment
            + window_adjustment
        )

        recommended = btu_to_tons(total_btu)
        minimum = recommended * MIN_TONNAGE_FACTOR
        maximum = recommended * MAX_TONNAGE_FACTOR
        match = evaluate_match(building.equipment_tonnage, recommended, minimum, maximum)

        return LoadCalculationResult(
            calculator=self.variant,
            recommended_tonnage=round_tons(recommended),
            min_tonnage=round_tons(minimum),
            max_tonnage=round_tons(maximum),
            total_btu_load=total_btu,
            equipment_match=match,
            confidence_level=assess_confidence(building),
            methodology=METHODOLOGY,
            breakdown={
                "base_load": round(base_load),
                "climate_adjustment": round(climate_adjustment),
                "insulation_adjustment": round(insulation_adjustment),
                "ceiling_adjustment": round(ceiling_adjustment),
                "window_adjustment": round(window_adjustment),
            },
            assumptions={
                "base_btu_per_sqft": BASE_BTU_PER_SQFT,
                "climate_factor": zone.factor,
                "insulation_factor": band.factor,
                "ceiling_height_ft": ceiling_height,
                "window_factor": windows,
            },
            warnings=self._warnings(building, match, recommended),
            recommendations=self._recommendations(building, match, band),
        )

    @staticmethod
    def _warnings(
        building: BuildingInput,
        match: EquipmentMatch,
        recommended: float,
    ) -> list[str]:
        warnings: list[str] = []
        tonnage = building.equipment_tonnage
        if match is EquipmentMatch.OVERSIZED:
            warnings.append(
                f"Equipment may be oversized. {tonnage:g} ton exceeds calculated "
                f"need of {recommended:.1f} ton."
            )
            warnings.append(
                "Oversized units cycle frequently, reducing efficiency and comfort."
            )
        if match is EquipmentMatch.UNDERSIZED:
            warnings.append(
                f"Equipment may be undersized. {tonnage:g} ton is below calculated "
                f"need of {recommended:.1f} ton."
            )
            warnings.append(
                "Undersized units may struggle to maintain temperature in peak heat."
            )
        if building.year_built < POOR_INSULATION_YEAR:
            warnings.append(
                "Pre-1980 construction may have poor insulation. Consider energy "
                "audit or insulation upgrade."
            )
        if building.square_footage > LARGE_HOME_SQFT:
            warnings.append(
                "Large homes may benefit from zone systems or room-by-room "
                "Manual J calculation."
            )
        return warnings

    @staticmethod
    def _recommendations(
        building: BuildingInput,
        match: EquipmentMatch,
        band: InsulationBand,
    ) -> list[str]:
        recommendations: list[str] = []
        if match in (EquipmentMatch.PERFECT, EquipmentMatch.ACCEPTABLE):
            recommendations.append("Equipment sizing is appropriate for this application.")
        if band.quality in (InsulationQuality.POOR, InsulationQuality.FAIR):
            recommendations.append(
                "Consider attic insulation upgrade to reduce cooling costs "
                "(typical ROI: 3-5 years)."
            )
        if building.year_built < OLD_WINDOWS_YEAR and building.window_quality is None:
            recommendations.append("Window upgrades could reduce cooling load by 10-15%.")
        recommendations.append(
            "Ensure proper duct sealing and insulation (saves 20-30% on energy)."
        )
        recommendations.append(
            "Annual maintenance improves efficiency and extends equipment life."
        )
        return recommendations
