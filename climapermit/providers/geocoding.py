"""Geocoding providers.

Google Maps is used when an API key is configured, otherwise OpenStreetMap
Nominatim (free, no key). Both return ``None`` when the address is not found
and raise ``GeocodingError`` on transport or payload errors, timeouts
included.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from climapermit.exceptions import GeocodingError
from climapermit.models.location import Coordinates

logger = logging.getLogger(__name__)

USER_AGENT = "climapermit/0.1 (HVAC permit geocoding)"


class Geocoder(Protocol):
    """Resolves a free-form address to coordinates."""

    def geocode(self, full_address: str) -> Coordinates | None: ...


def _get_json(
    session: requests.Session,
    url: str,
    params: dict[str, Any],
    timeout: float,
) -> Any:
    try:
        response = session.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        raise GeocodingError(f"Geocoding request failed: {exc}") from exc
    except ValueError as exc:
        raise GeocodingError("Geocoder returned invalid JSON") from exc


class NominatimGeocoder:
    """OpenStreetMap Nominatim search API, restricted to the US."""

    SEARCH_URL = "https://nominatim.openstreetmap.org/search"

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})
        self._timeout = timeout

    def geocode(self, full_address: str) -> Coordinates | None:
        params = {
            "q": full_address,
            "format": "json",
            "limit": 1,
            "countrycodes": "us",
        }
        results = _get_json(self._session, self.SEARCH_URL, params, self._timeout)
        if not results:
            logger.warning("No Nominatim results for: %s", full_address)
            return None
        try:
            top = results[0]
            coordinates = Coordinates(
                latitude=float(top["lat"]), longitude=float(top["lon"])
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError("Unexpected Nominatim payload") from exc
        logger.info(
            "Nominatim geocoded %s -> (%s, %s)",
            full_address, coordinates.latitude, coordinates.longitude,
        )
        return coordinates


class GoogleGeocoder:
    """Google Maps Geocoding API."""

    GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._api_key = api_key
        self._session = session or requests.Session()
        self._timeout = timeout

    def geocode(self, full_address: str) -> Coordinates | None:
        params = {"address": full_address, "key": self._api_key}
        data = _get_json(self._session, self.GEOCODE_URL, params, self._timeout)
        status = data.get("status") if isinstance(data, dict) else None
        if status == "ZERO_RESULTS":
            logger.warning("No Google geocoding results for: %s", full_address)
            return None
        if status != "OK" or not data.get("results"):
            raise GeocodingError(f"Google geocoding returned status {status!r}")
        try:
            location = data["results"][0]["geometry"]["location"]
            coordinates = Coordinates(
                latitude=float(location["lat"]), longitude=float(location["lng"])
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError("Unexpected Google geocoding payload") from exc
        logger.info(
            "Google geocoded %s -> (%s, %s)",
            full_address, coordinates.latitude, coordinates.longitude,
        )
        return coordinates
