"""Dependency wiring for FastAPI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from climapermit.config import Settings
from climapermit.factory import create_default_engine

if TYPE_CHECKING:
    from climapermit.engine import RequirementsEngine

logger = logging.getLogger(__name__)


def create_engine_from_env() -> RequirementsEngine:
    """Create a RequirementsEngine from environment variables.

    Without ``ANTHROPIC_API_KEY`` the engine still serves every endpoint;
    low-confidence classifications then carry a manual-verification note.
    """
    settings = Settings.from_env()
    if not settings.anthropic_api_key:
        logger.warning(
            "ANTHROPIC_API_KEY is not set; AI classification review disabled"
        )
    return create_default_engine(settings)
