"""Enums for the climapermit domain models.

Values double as the wire vocabulary used by the permit-info API, so they
match what contractors type into the intake form (``ac-unit``,
``new-installation``, ...).
"""

from enum import StrEnum


class County(StrEnum):
    """Counties of the serviced Tampa Bay region."""

    HILLSBOROUGH = "hillsborough"
    PASCO = "pasco"
    PINELLAS = "pinellas"
    MANATEE = "manatee"
    SARASOTA = "sarasota"


class Confidence(StrEnum):
    """Confidence level of a derived decision."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class JurisdictionType(StrEnum):
    INCORPORATED = "incorporated"
    UNINCORPORATED = "unincorporated"


class RestrictionReason(StrEnum):
    """Why a site carries a height restriction."""

    AIRPORT = "airport"
    HISTORIC = "historic"
    ZONING = "zoning"
    COASTAL = "coastal"


class EquipmentType(StrEnum):
    FURNACE = "furnace"
    AC_UNIT = "ac-unit"
    HEAT_PUMP = "heat-pump"
    DUCTWORK = "ductwork"
    HVAC_SYSTEM = "hvac-system"


class JobType(StrEnum):
    REPLACEMENT = "replacement"
    NEW_INSTALLATION = "new-installation"
    MODIFICATION = "modification"
    REPAIR = "repair"


class PropertyType(StrEnum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class PermitCategory(StrEnum):
    """Permit categories issued for HVAC work."""

    RESIDENTIAL_REPLACEMENT = "hvac-residential-replacement"
    RESIDENTIAL_NEW = "hvac-residential-new"
    RESIDENTIAL_DUCTWORK = "hvac-residential-ductwork"
    RESIDENTIAL_MODIFICATION = "hvac-residential-modification"
    COMMERCIAL = "hvac-commercial"


class Complexity(StrEnum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class DecisionMethod(StrEnum):
    """Which stage of the classification pipeline produced the result."""

    RULES = "rules"
    AI = "ai"


class EquipmentMatch(StrEnum):
    """How proposed equipment tonnage compares to the calculated load."""

    PERFECT = "perfect"
    ACCEPTABLE = "acceptable"
    OVERSIZED = "oversized"
    UNDERSIZED = "undersized"


class InsulationQuality(StrEnum):
    POOR = "poor"
    FAIR = "fair"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"


class WindowQuality(StrEnum):
    SINGLE = "single"
    DOUBLE = "double"
    LOW_E = "low-e"


class CalculatorVariant(StrEnum):
    """Load calculator implementations."""

    SIMPLIFIED = "simplified"
    DETAILED = "detailed"
