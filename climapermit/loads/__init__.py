"""Cooling load calculators sharing one result type."""

from __future__ import annotations

from climapermit.loads.base import LoadCalculator, btu_to_tons, round_tons
from climapermit.loads.manual_j import ManualJLoadCalculator
from climapermit.loads.simplified import SimplifiedLoadCalculator
from climapermit.models.enums import CalculatorVariant


def default_calculators() -> dict[CalculatorVariant, LoadCalculator]:
    """One instance of every built-in calculator, keyed by variant."""
    return {
        CalculatorVariant.SIMPLIFIED: SimplifiedLoadCalculator(),
        CalculatorVariant.DETAILED: ManualJLoadCalculator(),
    }


__all__ = [
    "LoadCalculator",
    "ManualJLoadCalculator",
    "SimplifiedLoadCalculator",
    "btu_to_tons",
    "default_calculators",
    "round_tons",
]
