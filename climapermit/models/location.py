"""Location analysis models.

All models are frozen: a ``LocationAnalysis`` is built once per request and
handed to callers as an immutable decision record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from climapermit.models.enums import (
    Confidence,
    County,
    JurisdictionType,
    RestrictionReason,
)


class Coordinates(BaseModel):
    """A WGS84 point."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SiteAddress(BaseModel):
    """Resolved site address. ``coordinates`` is always populated."""

    model_config = ConfigDict(frozen=True)

    street: str
    city: str
    county: County
    state: str
    zip_code: str
    coordinates: Coordinates


class JurisdictionInfo(BaseModel):
    """Which authority issues the permit."""

    model_config = ConfigDict(frozen=True)

    type: JurisdictionType
    primary_authority: str
    secondary_authority: str | None = None
    permit_office: str = Field(min_length=1)


class FloodZoneInfo(BaseModel):
    """Interpreted FEMA flood zone.

    ``base_flood_elevation`` is a provisional placeholder for zones that
    carry a defined BFE, never an authoritative FIRM panel value.
    """

    model_config = ConfigDict(frozen=True)

    zone: str
    is_flood_zone: bool
    requires_elevation_certificate: bool
    coastal_high_hazard: bool = False
    base_flood_elevation: float | None = None
    firm_panel_number: str | None = None

    @model_validator(mode="after")
    def certificate_implies_flood_zone(self) -> FloodZoneInfo:
        if self.requires_elevation_certificate and not self.is_flood_zone:
            msg = (
                f"Zone {self.zone!r} requires an elevation certificate "
                f"but is not marked as a flood zone"
            )
            raise ValueError(msg)
        return self


class CoastalInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_coastal: bool
    design_wind_speed_mph: int
    requires_wind_calculation: bool
    wind_zone_label: str


class HeightRestrictionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_restriction: bool
    max_height_ft: float | None = None
    reason: RestrictionReason | None = None
    nearby_landmark: str | None = None
    distance_miles: float | None = None


class SpecialDistrictInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    historic: bool = False
    has_hoa: bool = False
    environmental_review: bool = False
    reasons: list[str] = Field(default_factory=list)


class LocationAnalysis(BaseModel):
    """Everything the engine knows about a job site."""

    model_config = ConfigDict(frozen=True)

    address: SiteAddress
    jurisdiction: JurisdictionInfo
    flood_zone: FloodZoneInfo
    coastal: CoastalInfo
    height_restriction: HeightRestrictionInfo
    special_districts: SpecialDistrictInfo
    additional_forms: list[str] = Field(default_factory=list)
    confidence: Confidence
    warnings: list[str] = Field(default_factory=list)
