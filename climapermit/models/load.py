"""Heat-load calculation input and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from climapermit.models.enums import (
    CalculatorVariant,
    Confidence,
    EquipmentMatch,
    InsulationQuality,
    WindowQuality,
)


class BuildingInput(BaseModel):
    """Building attributes consumed by both load calculators.

    ``county`` is free text rather than a ``County`` member because climate
    regions are matched by keyword across the whole state.
    """

    model_config = ConfigDict(frozen=True)

    square_footage: float = Field(gt=0)
    year_built: int = Field(ge=1800, le=2100)
    city: str = ""
    county: str = ""
    zip_code: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    ceiling_height_ft: float | None = Field(default=None, ge=7, le=20)
    stories: int | None = Field(default=None, ge=1)
    bedrooms: int | None = Field(default=None, ge=0)
    insulation: InsulationQuality | None = None
    window_quality: WindowQuality | None = None
    equipment_tonnage: float | None = Field(default=None, gt=0)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class LoadCalculationResult(BaseModel):
    """Shared result shape for every ``LoadCalculator``.

    ``breakdown`` holds labeled BTU/hr components; ``assumptions`` holds the
    numeric inputs the calculator derived (areas, U-values, temperatures).
    """

    model_config = ConfigDict(frozen=True)

    calculator: CalculatorVariant
    recommended_tonnage: float
    min_tonnage: float
    max_tonnage: float
    total_btu_load: int
    sensible_load: int | None = None
    latent_load: int | None = None
    heating_load: int | None = None
    equipment_match: EquipmentMatch
    confidence_level: Confidence
    methodology: str
    breakdown: dict[str, float] = Field(default_factory=dict)
    assumptions: dict[str, float] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
