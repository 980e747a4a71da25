"""Tests for LocationIntelligence: geocoder and FEMA providers are mocked."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from climapermit.exceptions import FloodLookupError, GeocodingError
from climapermit.models.enums import (
    Confidence,
    County,
    JurisdictionType,
    RestrictionReason,
)
from climapermit.models.location import Coordinates
from climapermit.providers.flood import FemaFloodZoneProvider, FloodLookupResult
from climapermit.services.location_intelligence import (
    PLACEHOLDER_BASE_FLOOD_ELEVATION_FT,
    LocationIntelligence,
    coastal_wind_zone,
    interpret_flood_zone,
)

TAMPA = Coordinates(latitude=27.9506, longitude=-82.4572)
ZEPHYRHILLS = Coordinates(latitude=28.2336, longitude=-82.1812)
NEW_PORT_RICHEY = Coordinates(latitude=28.2442, longitude=-82.7193)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _geocoder(result: Coordinates | None = None, error: bool = False) -> MagicMock:
    geocoder = MagicMock()
    if error:
        geocoder.geocode.side_effect = GeocodingError("geocoder down")
    else:
        geocoder.geocode.return_value = result
    return geocoder


def _flood(
    zone: str | None = "X",
    panel: str | None = None,
    error: bool = False,
) -> MagicMock:
    provider = MagicMock()
    if error:
        provider.lookup_flood_zone.side_effect = FloodLookupError("FEMA timeout")
    elif zone is None:
        provider.lookup_flood_zone.return_value = None
    else:
        provider.lookup_flood_zone.return_value = FloodLookupResult(zone, panel)
    return provider


def _analyze(
    intelligence: LocationIntelligence,
    city: str = "Tampa",
    address: str = "100 N Ashley Dr",
    zip_code: str = "33602",
):
    return intelligence.analyze(address, city, "FL", zip_code)


# ---------------------------------------------------------------------------
# Flood zone interpretation
# ---------------------------------------------------------------------------


class TestInterpretFloodZone:
    def test_ae_zone(self) -> None:
        info = interpret_flood_zone("AE", "12057C0201J")
        assert info.zone == "AE"
        assert info.is_flood_zone
        assert info.requires_elevation_certificate
        assert not info.coastal_high_hazard
        assert info.base_flood_elevation == PLACEHOLDER_BASE_FLOOD_ELEVATION_FT
        assert info.firm_panel_number == "12057C0201J"

    def test_ve_zone_is_coastal_high_hazard(self) -> None:
        info = interpret_flood_zone("VE")
        assert info.coastal_high_hazard
        assert info.requires_elevation_certificate
        assert info.base_flood_elevation == PLACEHOLDER_BASE_FLOOD_ELEVATION_FT

    def test_plain_a_zone_has_no_bfe(self) -> None:
        info = interpret_flood_zone("A")
        assert info.is_flood_zone
        assert info.base_flood_elevation is None

    def test_lowercase_code_normalized(self) -> None:
        assert interpret_flood_zone(" ao ").zone == "AO"

    @pytest.mark.parametrize("code", ["X500", "B", "X-SHADED", "0.2 PCT X-SHADED"])
    def test_shaded_zones_flagged_without_certificate(self, code: str) -> None:
        info = interpret_flood_zone(code)
        assert info.zone == "X-Shaded"
        assert info.is_flood_zone
        assert not info.requires_elevation_certificate

    @pytest.mark.parametrize("code", ["X", "C", "D", ""])
    def test_everything_else_is_minimal_risk(self, code: str) -> None:
        info = interpret_flood_zone(code)
        assert info.zone == "X"
        assert not info.is_flood_zone

    @pytest.mark.parametrize(
        "code",
        ["A", "AE", "AH", "AO", "A99", "AR", "V", "VE", "X", "X500", "B", "C", "D", "?"],
    )
    def test_certificate_implies_flood_zone(self, code: str) -> None:
        info = interpret_flood_zone(code)
        assert not info.requires_elevation_certificate or info.is_flood_zone


class TestCoastalWindZone:
    def test_west_of_threshold_is_coastal(self) -> None:
        info = coastal_wind_zone(-82.31)
        assert info.is_coastal
        assert info.design_wind_speed_mph == 150
        assert info.requires_wind_calculation
        assert info.wind_zone_label == "Zone 1 (Coastal)"

    def test_threshold_itself_is_inland(self) -> None:
        info = coastal_wind_zone(-82.3)
        assert not info.is_coastal
        assert info.design_wind_speed_mph == 130
        assert info.wind_zone_label == "Zone 2 (Inland)"


# ---------------------------------------------------------------------------
# Full analysis
# ---------------------------------------------------------------------------


class TestAnalyzeTampa:
    @pytest.fixture()
    def analysis(self):
        intelligence = LocationIntelligence(
            geocoder=_geocoder(TAMPA), flood_provider=_flood("X")
        )
        return _analyze(intelligence)

    def test_confidence_high_when_geocoded(self, analysis) -> None:
        assert analysis.confidence is Confidence.HIGH
        assert analysis.address.coordinates == TAMPA

    def test_incorporated_jurisdiction(self, analysis) -> None:
        assert analysis.address.county is County.HILLSBOROUGH
        assert analysis.jurisdiction.type is JurisdictionType.INCORPORATED
        assert analysis.jurisdiction.primary_authority == "hillsborough-county"
        assert analysis.jurisdiction.secondary_authority == "city-of-tampa"
        assert analysis.jurisdiction.permit_office == "City of Tampa Development Services"

    def test_airport_height_restriction(self, analysis) -> None:
        height = analysis.height_restriction
        assert height.has_restriction
        assert height.reason is RestrictionReason.AIRPORT
        assert height.max_height_ft == 35.0
        assert height.nearby_landmark == "Peter O. Knight Airport (TPF)"
        assert height.distance_miles is not None
        assert height.distance_miles < 10.0
        assert height.distance_miles == round(height.distance_miles, 1)

    def test_special_districts(self, analysis) -> None:
        districts = analysis.special_districts
        assert districts.historic
        assert not districts.has_hoa
        assert districts.environmental_review
        assert districts.reasons == [
            "Property may be in historic district - verify with city",
            "Coastal area - may require environmental review",
        ]

    def test_forms_in_order(self, analysis) -> None:
        assert analysis.additional_forms == [
            "city-of-tampa-addendum",
            "wind-load-calculation",
            "faa-height-notification",
            "historic-preservation-review",
        ]

    def test_warnings(self, analysis) -> None:
        assert any(w.startswith("HEIGHT RESTRICTION: Maximum 35 feet") for w in analysis.warnings)
        assert any(w.startswith("HISTORIC DISTRICT") for w in analysis.warnings)
        assert any(w.startswith("COASTAL AREA") for w in analysis.warnings)
        assert not any(w.startswith("FLOOD ZONE") for w in analysis.warnings)

    def test_full_address_sent_to_geocoder(self) -> None:
        geocoder = _geocoder(TAMPA)
        _analyze(LocationIntelligence(geocoder=geocoder, flood_provider=_flood()))
        geocoder.geocode.assert_called_once_with("100 N Ashley Dr, Tampa, FL 33602")


class TestAnalyzeOtherSites:
    def test_unincorporated_pasco_with_hoa(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(Coordinates(latitude=28.2416, longitude=-82.3275)),
            flood_provider=_flood("X"),
        )
        analysis = _analyze(intelligence, city="Wesley Chapel", zip_code="33544")
        assert analysis.address.county is County.PASCO
        assert analysis.jurisdiction.type is JurisdictionType.UNINCORPORATED
        assert analysis.jurisdiction.secondary_authority is None
        assert analysis.jurisdiction.permit_office == "Pasco County Development Services"
        assert analysis.special_districts.has_hoa
        assert analysis.special_districts.reasons[0] == (
            "PASCO COUNTY: This area typically has HOA restrictions"
        )
        assert not any(f.endswith("-addendum") for f in analysis.additional_forms)

    def test_inland_site_without_restrictions(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(ZEPHYRHILLS), flood_provider=_flood("X")
        )
        analysis = _analyze(intelligence, city="Zephyrhills", zip_code="33542")
        assert not analysis.coastal.is_coastal
        assert not analysis.height_restriction.has_restriction
        assert analysis.height_restriction.reason is None
        assert not analysis.special_districts.environmental_review
        assert analysis.additional_forms == ["city-of-zephyrhills-addendum"]
        assert analysis.warnings == []

    def test_west_pasco_flood_zone(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(NEW_PORT_RICHEY),
            flood_provider=_flood("VE", panel="12101C0289F"),
        )
        analysis = _analyze(intelligence, city="New Port Richey", zip_code="34652")
        assert analysis.flood_zone.zone == "VE"
        assert analysis.flood_zone.firm_panel_number == "12101C0289F"
        assert "fema-elevation-certificate" in analysis.additional_forms
        assert "WEST PASCO: Coastal zone with additional wind and flood requirements" in (
            analysis.special_districts.reasons
        )
        assert "FLOOD ZONE VE: This property is in a FEMA flood zone." in analysis.warnings
        assert (
            "ELEVATION CERTIFICATE REQUIRED: Must be completed by licensed surveyor."
            in analysis.warnings
        )
        assert analysis.confidence is Confidence.HIGH

    def test_no_flood_data_means_zone_x(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(TAMPA), flood_provider=_flood(zone=None)
        )
        analysis = _analyze(intelligence)
        assert analysis.flood_zone.zone == "X"
        assert analysis.confidence is Confidence.HIGH


# ---------------------------------------------------------------------------
# Degradation and fallbacks
# ---------------------------------------------------------------------------


class TestFallbacks:
    def test_geocoder_failure_uses_city_centroid(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(error=True), flood_provider=_flood("X")
        )
        analysis = _analyze(intelligence)
        assert analysis.confidence is Confidence.MEDIUM
        assert analysis.address.coordinates == TAMPA
        assert any("geocoded precisely" in w for w in analysis.warnings)

    def test_empty_geocoder_result_uses_city_centroid(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(None), flood_provider=_flood("X")
        )
        assert _analyze(intelligence).confidence is Confidence.MEDIUM

    def test_no_geocoder_configured(self) -> None:
        intelligence = LocationIntelligence(flood_provider=_flood("X"))
        assert _analyze(intelligence).confidence is Confidence.MEDIUM

    def test_flood_failure_lowers_confidence_one_step(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(ZEPHYRHILLS), flood_provider=_flood(error=True)
        )
        analysis = _analyze(intelligence, city="Zephyrhills", zip_code="33542")
        assert analysis.confidence is Confidence.MEDIUM
        assert analysis.flood_zone.zone == "X"
        assert any("FEMA flood data unavailable" in w for w in analysis.warnings)

    def test_flood_heuristic_flags_waterfront(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(NEW_PORT_RICHEY), flood_provider=_flood(error=True)
        )
        analysis = _analyze(intelligence, city="New Port Richey", zip_code="34652")
        assert analysis.flood_zone.zone == "AE"
        assert analysis.flood_zone.requires_elevation_certificate
        assert analysis.flood_zone.base_flood_elevation == PLACEHOLDER_BASE_FLOOD_ELEVATION_FT

    def test_malformed_fema_payload_falls_back_to_heuristic(self) -> None:
        session = MagicMock()
        session.get.return_value.json.return_value = {"results": ["oops"]}
        intelligence = LocationIntelligence(
            geocoder=_geocoder(NEW_PORT_RICHEY),
            flood_provider=FemaFloodZoneProvider(session=session),
        )
        analysis = _analyze(intelligence, city="New Port Richey", zip_code="34652")
        assert analysis.confidence is Confidence.MEDIUM
        assert analysis.flood_zone.zone == "AE"
        assert any("FEMA flood data unavailable" in w for w in analysis.warnings)

    def test_unknown_city_with_every_provider_down(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(error=True), flood_provider=_flood(error=True)
        )
        analysis = _analyze(intelligence, city="Atlantis", zip_code="33999")

        assert analysis.confidence is Confidence.LOW
        assert analysis.address.county is County.HILLSBOROUGH
        assert analysis.address.coordinates == Coordinates(latitude=28.0, longitude=-82.5)
        assert analysis.flood_zone.zone == "X"
        assert not analysis.flood_zone.is_flood_zone
        assert analysis.jurisdiction.permit_office == "Hillsborough County Development Services"
        assert any("Unrecognized city 'Atlantis'" in w for w in analysis.warnings)

    def test_unknown_city_confidence_never_above_medium(self) -> None:
        intelligence = LocationIntelligence(
            geocoder=_geocoder(error=True), flood_provider=_flood("X")
        )
        analysis = _analyze(intelligence, city="Atlantis", zip_code="33999")
        assert analysis.confidence in (Confidence.MEDIUM, Confidence.LOW)

    def test_unexpected_errors_propagate(self) -> None:
        geocoder = MagicMock()
        geocoder.geocode.side_effect = RuntimeError("bug")
        intelligence = LocationIntelligence(geocoder=geocoder, flood_provider=_flood())
        with pytest.raises(RuntimeError):
            _analyze(intelligence)
