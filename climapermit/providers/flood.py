"""FEMA National Flood Hazard Layer lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from climapermit.exceptions import FloodLookupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FloodLookupResult:
    """Raw zone designation returned by a hazard-layer service."""

    zone_code: str
    panel_id: str | None = None


class FloodZoneProvider(Protocol):
    """Looks up the flood zone at a point.

    Returns None when the service has no mapped zone there.
    """

    def lookup_flood_zone(
        self, latitude: float, longitude: float
    ) -> FloodLookupResult | None: ...


class FemaFloodZoneProvider:
    """Queries the NFHL ``identify`` endpoint for Special Flood Hazard Areas."""

    IDENTIFY_URL = (
        "https://hazards.fema.gov/gis/nfhl/rest/services/public/NFHLWMS/"
        "MapServer/identify"
    )
    # Layer 28 = Flood Hazard Zones
    LAYERS = "all:28"

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        self._timeout = timeout

    def lookup_flood_zone(
        self, latitude: float, longitude: float
    ) -> FloodLookupResult | None:
        params = {
            "geometry": f"{longitude},{latitude}",
            "geometryType": "esriGeometryPoint",
            "sr": "4326",
            "layers": self.LAYERS,
            "tolerance": "2",
            "mapExtent": (
                f"{longitude - 0.01},{latitude - 0.01},"
                f"{longitude + 0.01},{latitude + 0.01}"
            ),
            "imageDisplay": "400,400,96",
            "returnGeometry": "false",
            "f": "json",
        }
        logger.info("Querying FEMA NFHL at (%s, %s)", latitude, longitude)
        try:
            response = self._session.get(
                self.IDENTIFY_URL, params=params, timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise FloodLookupError(f"FEMA request failed: {exc}") from exc
        except ValueError as exc:
            raise FloodLookupError("FEMA returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise FloodLookupError("Unexpected FEMA payload")
        if "error" in data:
            raise FloodLookupError(f"FEMA service error: {data['error']}")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise FloodLookupError("Unexpected FEMA payload")
        if not results:
            return None

        first = results[0]
        if not isinstance(first, dict):
            raise FloodLookupError("Unexpected FEMA payload")
        attributes = first.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise FloodLookupError("Unexpected FEMA payload")
        zone = attributes.get("FLD_ZONE") or attributes.get("ZONE_SUBTY") or "X"
        panel = attributes.get("DFIRM_ID") or attributes.get("PANEL")
        logger.info("FEMA flood zone %s (panel %s)", zone, panel)
        return FloodLookupResult(
            zone_code=str(zone),
            panel_id=str(panel) if panel else None,
        )
