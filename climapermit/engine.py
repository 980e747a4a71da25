"""Requirements determination engine.

Composes the decision components into one decision record:

1. **Location**: jurisdiction, flood, wind, height, and district rules for
   the site (``LocationIntelligence``).
2. **Classification**: permit category and code for the job
   (``PermitClassifier``).
3. **Requirements**: office, fees, documents, and timeline for the
   classified permit (``CountyPermitRepository``).
4. **Load**: optional equipment sizing check (``LoadCalculator``).

Every warning raised along the way is collected on the decision so callers
can surface it.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from climapermit.data.repository import CountyPermitRepository
from climapermit.loads import default_calculators
from climapermit.models.enums import CalculatorVariant, Confidence, JobType
from climapermit.models.requirements import (
    PermitOfficeContact,
    PermitRequirements,
    PermitTimeline,
    RequirementsDecision,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from climapermit.loads.base import LoadCalculator
    from climapermit.models.enums import County
    from climapermit.models.load import BuildingInput, LoadCalculationResult
    from climapermit.models.location import LocationAnalysis
    from climapermit.models.permit import PermitClassification, PermitJobRequest
    from climapermit.services.location_intelligence import LocationIntelligence
    from climapermit.services.permit_classifier import PermitClassifier

logger = logging.getLogger(__name__)

_DOLLAR_AMOUNT = re.compile(r"\$([0-9,]+)")


def parse_valuation(details: str | None) -> float | None:
    """Return the first dollar amount in free text, e.g. ``"$12,500"``."""
    if not details or "$" not in details:
        return None
    match = _DOLLAR_AMOUNT.search(details)
    if match is None:
        return None
    digits = match.group(1).replace(",", "")
    if not digits:
        return None
    return float(digits)


class RequirementsEngine:
    """Entry point for permit requirement decisions.

    Args:
        location_intelligence: Site analysis component.
        classifier: Permit classification component.
        county_repository: County permit profiles; defaults to the built-in
            profiles.
        calculators: Load calculators keyed by variant; defaults to the
            simplified and Manual J calculators.

    Example::

        from climapermit import create_default_engine

        engine = create_default_engine()
        decision = engine.determine(job, building)
    """

    def __init__(
        self,
        location_intelligence: LocationIntelligence,
        classifier: PermitClassifier,
        county_repository: CountyPermitRepository | None = None,
        calculators: Mapping[CalculatorVariant, LoadCalculator] | None = None,
    ) -> None:
        self._location = location_intelligence
        self._classifier = classifier
        self._counties = county_repository or CountyPermitRepository()
        self._calculators = dict(calculators or default_calculators())

    # ------------------------------------------------------------------
    # Component entry points
    # ------------------------------------------------------------------

    def analyze_location(
        self,
        address: str,
        city: str,
        state: str,
        zip_code: str,
    ) -> LocationAnalysis:
        return self._location.analyze(address, city, state, zip_code)

    def classify_permit(self, request: PermitJobRequest) -> PermitClassification:
        return self._classifier.classify(request)

    def calculate_load(
        self,
        building: BuildingInput,
        variant: CalculatorVariant = CalculatorVariant.SIMPLIFIED,
    ) -> LoadCalculationResult:
        """Run the requested load calculator.

        Raises:
            ValueError: No calculator is registered for ``variant``.
        """
        calculator = self._calculators.get(variant)
        if calculator is None:
            msg = f"No load calculator registered for variant '{variant}'"
            raise ValueError(msg)
        return calculator.calculate(building)

    def permit_info(
        self,
        request: PermitJobRequest,
        classification: PermitClassification | None = None,
        expedited: bool = False,
    ) -> PermitRequirements:
        """Fees, documents, office, and timeline for the job's permit.

        The job is classified first unless a classification is supplied.
        A dollar amount in the job's additional details is taken as the
        job valuation; otherwise the valuation is estimated.
        """
        if classification is None:
            classification = self.classify_permit(request)
        return self._requirements_for(
            request, classification, request.location.county, expedited
        )

    # ------------------------------------------------------------------
    # Merged decision
    # ------------------------------------------------------------------

    def determine(
        self,
        request: PermitJobRequest,
        building: BuildingInput | None = None,
        variant: CalculatorVariant | None = None,
    ) -> RequirementsDecision:
        """Produce the full decision record for a job.

        When ``variant`` is not given, the detailed calculator is used if
        the site was geocoded precisely, the simplified one otherwise.
        """
        job_location = request.location
        location = self.analyze_location(
            job_location.address,
            job_location.city,
            job_location.state,
            job_location.zip_code,
        )
        classification = self.classify_permit(request)
        requirements = self._requirements_for(
            request, classification, job_location.county, expedited=False
        )

        warnings = [*location.warnings]
        detected_county = location.address.county
        if detected_county != job_location.county:
            warnings.append(
                f"Stated county '{job_location.county}' differs from "
                f"'{detected_county}' detected for {job_location.city}; "
                f"verify the permitting county."
            )
        warnings.extend(requirements.warnings)

        load: LoadCalculationResult | None = None
        if building is not None:
            building = self._with_site_data(building, location)
            if variant is None:
                variant = (
                    CalculatorVariant.DETAILED
                    if building.has_coordinates
                    else CalculatorVariant.SIMPLIFIED
                )
            load = self.calculate_load(building, variant)
            warnings.extend(load.warnings)
        elif request.job_type is JobType.NEW_INSTALLATION:
            warnings.append(
                "New installations require a Manual J load calculation; "
                "provide building details to size the equipment."
            )

        logger.info(
            "Decision for %s: %s (%s), location confidence %s",
            job_location.address,
            classification.jurisdiction_code,
            classification.decision_method,
            location.confidence,
        )
        return RequirementsDecision(
            location=location,
            classification=classification,
            requirements=requirements,
            load=load,
            additional_forms=list(location.additional_forms),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _requirements_for(
        self,
        request: PermitJobRequest,
        classification: PermitClassification,
        county: County,
        expedited: bool,
    ) -> PermitRequirements:
        profile, fallback_reasons = self._counties.get_profile(county)
        for reason in fallback_reasons:
            logger.warning("%s", reason)

        code = classification.jurisdiction_code
        valuation = parse_valuation(request.additional_details)
        if valuation is None:
            valuation = self._counties.estimate_valuation(
                request.equipment_type,
                request.tonnage,
                new_installation=request.job_type is JobType.NEW_INSTALLATION,
            )

        schedule = profile.fee_schedule
        return PermitRequirements(
            description=self._counties.describe(code),
            office=PermitOfficeContact(
                county=profile.name,
                department=profile.department,
                phone=profile.phone,
                website=profile.website,
                address=profile.address,
            ),
            fees=self._counties.estimate_fees(profile, code, valuation, expedited),
            documents=self._counties.required_documents(profile, code),
            timeline=PermitTimeline(
                estimated_processing_days=self._counties.processing_days(
                    profile, code, expedited
                ),
                expedited_available=True,
                expedited_days=profile.processing_times.expedited,
                expedited_fee=schedule.expedited_fee,
            ),
            warnings=fallback_reasons,
        )

    @staticmethod
    def _with_site_data(
        building: BuildingInput, location: LocationAnalysis
    ) -> BuildingInput:
        """Fill missing building location fields from the site analysis.

        Coordinates are only copied when the site was geocoded precisely.
        """
        update: dict[str, object] = {}
        if not building.city:
            update["city"] = location.address.city
        if not building.county:
            update["county"] = str(location.address.county)
        if not building.zip_code:
            update["zip_code"] = location.address.zip_code
        if not building.has_coordinates and location.confidence is Confidence.HIGH:
            update["latitude"] = location.address.coordinates.latitude
            update["longitude"] = location.address.coordinates.longitude
        if not update:
            return building
        return building.model_copy(update=update)
