"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Load .env from the project root, then the working directory
_project_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_project_root / ".env")
load_dotenv()

from climapermit.config import Settings
from climapermit.exceptions import ClimaPermitError
from climapermit.models.enums import CalculatorVariant
from climapermit.models.load import BuildingInput  # noqa: TCH001 (FastAPI resolves at runtime)
from climapermit.models.permit import PermitJobRequest  # noqa: TCH001

if TYPE_CHECKING:
    from climapermit.engine import RequirementsEngine

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


class LocationRequest(BaseModel):
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    state: str = "FL"
    zip_code: str = Field(pattern=r"^\d{5}$")


class LoadCalculationRequest(BaseModel):
    building: BuildingInput
    variant: CalculatorVariant = CalculatorVariant.SIMPLIFIED


class PermitInfoRequest(BaseModel):
    job: PermitJobRequest
    expedited: bool = False


class DetermineRequest(BaseModel):
    job: PermitJobRequest
    building: BuildingInput | None = None
    variant: CalculatorVariant | None = None


def create_app(*, engine: RequirementsEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine
        Optional pre-built engine for dependency injection (e.g. tests).
        If not provided, one is created from environment variables on the
        first request that needs it.
    """
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="ClimaPermit", version=API_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject fakes
    app.state.engine = engine

    def _get_engine() -> RequirementsEngine:
        eng: RequirementsEngine | None = app.state.engine
        if eng is not None:
            return eng
        from climapermit.api.deps import create_engine_from_env

        eng = create_engine_from_env()
        app.state.engine = eng
        return eng

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    # ------------------------------------------------------------------
    # POST /api/location
    # ------------------------------------------------------------------

    @app.post("/api/location")
    def location(request: LocationRequest) -> dict[str, Any]:
        analysis = _get_engine().analyze_location(
            request.address, request.city, request.state, request.zip_code
        )
        return analysis.model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/classify
    # ------------------------------------------------------------------

    @app.post("/api/classify")
    def classify(job: PermitJobRequest) -> dict[str, Any]:
        classification = _get_engine().classify_permit(job)
        return classification.model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/load-calculation
    # ------------------------------------------------------------------

    @app.post("/api/load-calculation")
    def load_calculation(request: LoadCalculationRequest) -> dict[str, Any]:
        try:
            result = _get_engine().calculate_load(request.building, request.variant)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return result.model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/permit-info
    # ------------------------------------------------------------------

    @app.post("/api/permit-info")
    def permit_info(request: PermitInfoRequest) -> dict[str, Any]:
        eng = _get_engine()
        try:
            classification = eng.classify_permit(request.job)
            requirements = eng.permit_info(
                request.job, classification, expedited=request.expedited
            )
        except ClimaPermitError as exc:
            logger.exception("Permit info request failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {
            "classification": classification.model_dump(mode="json"),
            "requirements": requirements.model_dump(mode="json"),
        }

    # ------------------------------------------------------------------
    # POST /api/determine
    # ------------------------------------------------------------------

    @app.post("/api/determine")
    def determine(request: DetermineRequest) -> dict[str, Any]:
        try:
            decision = _get_engine().determine(
                request.job, request.building, request.variant
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ClimaPermitError as exc:
            logger.exception("Requirements determination failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return decision.model_dump(mode="json")

    return app
