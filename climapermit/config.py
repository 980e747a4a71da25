"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_AI_MODEL = "claude-sonnet-4-5-20250929"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Engine configuration.

    Attributes:
        anthropic_api_key: Enables AI escalation for low-confidence
            classifications when set.
        ai_model: Anthropic model used for escalated classifications.
        ai_timeout: Seconds before an AI call is treated as failed.
        google_maps_api_key: Use Google geocoding when set, otherwise
            OpenStreetMap Nominatim.
        http_timeout: Seconds before a geocoder or FEMA call is treated
            as failed.
        log_level: Level name applied by the API process.
    """

    anthropic_api_key: str | None = None
    ai_model: str = DEFAULT_AI_MODEL
    ai_timeout: float = 30.0
    google_maps_api_key: str | None = None
    http_timeout: float = 5.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables."""
        return cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY") or None,
            ai_model=os.environ.get("CLIMAPERMIT_AI_MODEL") or DEFAULT_AI_MODEL,
            ai_timeout=_float_env("CLIMAPERMIT_AI_TIMEOUT", 30.0),
            google_maps_api_key=os.environ.get("GOOGLE_MAPS_API_KEY") or None,
            http_timeout=_float_env("CLIMAPERMIT_HTTP_TIMEOUT", 5.0),
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )
