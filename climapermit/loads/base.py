"""Shared pieces of the load calculators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from climapermit.models.enums import CalculatorVariant
    from climapermit.models.load import BuildingInput, LoadCalculationResult

BTU_PER_TON = 12_000
DEFAULT_CEILING_HEIGHT_FT = 8.0

# Acceptable equipment range around the recommended tonnage. Florida allows
# slight oversizing.
MIN_TONNAGE_FACTOR = 0.90
MAX_TONNAGE_FACTOR = 1.15

PERFECT_MATCH_TONS = 0.3


class LoadCalculator(Protocol):
    """Computes a cooling load for a building. Implementations are pure."""

    variant: CalculatorVariant

    def calculate(self, building: BuildingInput) -> LoadCalculationResult: ...


def btu_to_tons(btu: float) -> float:
    return btu / BTU_PER_TON


def round_tons(tons: float) -> float:
    """Round a tonnage to one decimal place."""
    return round(tons * 10) / 10
