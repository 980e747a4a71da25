"""Permit classification: rules first, AI only when the rules are unsure.

The classifier is a two-stage pipeline:

1. **Rule evaluation** always runs. ``classify_by_rules`` maps the job onto
   a permit category with a fixed rule table, and ``is_high_confidence``
   decides whether that answer can be trusted as-is.
2. **AI escalation** runs only for low-confidence jobs and only when a
   ``ClassificationProvider`` is configured. Its answer replaces the rule
   result; any provider failure falls back to the rule result with a
   disclaimer appended.

The stage that produced the answer is recorded in
``PermitClassification.decision_method``.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from climapermit.exceptions import AiClassificationError, AiResponseFormatError
from climapermit.models.enums import (
    Complexity,
    DecisionMethod,
    EquipmentType,
    JobType,
    PermitCategory,
    PropertyType,
)
from climapermit.models.permit import PermitClassification

if TYPE_CHECKING:
    from collections.abc import Mapping

    from climapermit.models.permit import PermitJobRequest
    from climapermit.providers.ai import ClassificationProvider

logger = logging.getLogger(__name__)

CATEGORY_CODES: Mapping[PermitCategory, str] = MappingProxyType({
    PermitCategory.COMMERCIAL: "BLD-HVAC-COM",
    PermitCategory.RESIDENTIAL_DUCTWORK: "BLD-MECH-DUCTWORK",
    PermitCategory.RESIDENTIAL_REPLACEMENT: "BLD-HVAC-RES-REPL",
    PermitCategory.RESIDENTIAL_NEW: "BLD-HVAC-RES-NEW",
    PermitCategory.RESIDENTIAL_MODIFICATION: "BLD-MECH-MOD",
})

LARGE_SYSTEM_TONS = 5.0
HIGH_BTU_INSPECTION = 100_000
HIGH_BTU_ESCALATION = 150_000
LONG_DETAILS_CHARS = 50

MANUAL_VERIFICATION_DISCLAIMER = (
    "Classification confidence is lower than normal. "
    "Please verify permit type with county."
)
AI_UNAVAILABLE_DISCLAIMER = (
    "AI review of this job was unavailable; rule-based classification used. "
    "Please verify permit type with county."
)
AI_MALFORMED_DISCLAIMER = (
    "AI review of this job returned an unusable answer; rule-based "
    "classification used. Please verify permit type with county."
)

_COMMERCIAL_TYPES = frozenset({PropertyType.COMMERCIAL, PropertyType.INDUSTRIAL})


def classify_by_rules(request: PermitJobRequest) -> PermitClassification:
    """Apply the deterministic permit rule table."""
    considerations: list[str] = []

    if request.property_type in _COMMERCIAL_TYPES:
        category = PermitCategory.COMMERCIAL
        reasoning = "Commercial property requires commercial HVAC permit"
        complexity = Complexity.COMPLEX
        considerations.append("Requires sealed engineering drawings")
        considerations.append("May require fire safety compliance")
    elif request.equipment_type is EquipmentType.DUCTWORK:
        category = PermitCategory.RESIDENTIAL_DUCTWORK
        reasoning = "Ductwork modification requires mechanical permit"
        complexity = Complexity.MODERATE
    elif request.job_type is JobType.REPLACEMENT:
        category = PermitCategory.RESIDENTIAL_REPLACEMENT
        reasoning = "Like-for-like equipment replacement"
        complexity = Complexity.SIMPLE
        if request.tonnage and request.tonnage > LARGE_SYSTEM_TONS:
            considerations.append("Large system (>5 tons) may require additional review")
            complexity = Complexity.MODERATE
    elif request.job_type is JobType.NEW_INSTALLATION:
        category = PermitCategory.RESIDENTIAL_NEW
        reasoning = "New HVAC installation"
        complexity = Complexity.MODERATE
        considerations.append("Requires load calculation (Manual J per FBC 403.6.1)")
    else:
        category = PermitCategory.RESIDENTIAL_MODIFICATION
        reasoning = "HVAC system modification"
        complexity = Complexity.MODERATE
        considerations.append("Manual J not required for minor modifications")

    if request.btu and request.btu > HIGH_BTU_INSPECTION:
        considerations.append("High BTU system may require additional inspection")

    return PermitClassification(
        category=category,
        jurisdiction_code=CATEGORY_CODES[category],
        reasoning=reasoning,
        special_considerations=considerations,
        complexity=complexity,
        decision_method=DecisionMethod.RULES,
    )


def is_high_confidence(request: PermitJobRequest) -> bool:
    """Whether the rule table's answer for this job can be trusted as-is.

    Clear-cut jobs (commercial, ductwork, ordinary residential replacement)
    are checked first; ambiguous signals only count for the rest.
    """
    if request.property_type in _COMMERCIAL_TYPES:
        return True
    if request.equipment_type is EquipmentType.DUCTWORK:
        return True
    if (
        request.job_type is JobType.REPLACEMENT
        and request.property_type is PropertyType.RESIDENTIAL
        and (not request.tonnage or request.tonnage <= LARGE_SYSTEM_TONS)
    ):
        return True

    if (
        request.job_type is JobType.REPLACEMENT
        and request.tonnage
        and request.tonnage > LARGE_SYSTEM_TONS
    ):
        return False
    if request.job_type in (JobType.MODIFICATION, JobType.REPAIR):
        return False
    if request.btu and request.btu > HIGH_BTU_ESCALATION:
        return False
    if request.additional_details and len(request.additional_details) > LONG_DETAILS_CHARS:
        return False
    return True


def build_classification_prompt(request: PermitJobRequest) -> str:
    """Render every job attribute into the AI classification prompt."""
    location = request.location
    categories = ", ".join(c.value for c in PermitCategory)
    complexities = "|".join(c.value for c in Complexity)
    return (
        "Given this HVAC job in the Tampa Bay area of Florida, classify it "
        "into the correct permit category.\n\n"
        f"Equipment Type: {request.equipment_type}\n"
        f"Job Type: {request.job_type}\n"
        f"BTU: {request.btu or 'Not specified'}\n"
        f"Tonnage: {request.tonnage or 'Not specified'}\n"
        f"Location: {location.address}, {location.city}, {location.county} County, "
        f"{location.state} {location.zip_code}\n"
        f"Property Type: {request.property_type or 'Not specified'}\n"
        f"Additional Details: {request.additional_details or 'None'}\n\n"
        "Respond in JSON format with:\n"
        "{\n"
        f'  "permitCategory": "one of: {categories}",\n'
        '  "accelaPermitType": "permit type code, e.g. BLD-HVAC-RES-REPL",\n'
        '  "reasoning": "brief explanation of why this category applies",\n'
        '  "specialConsiderations": ["any special notes or requirements"],\n'
        f'  "estimatedComplexity": "{complexities}"\n'
        "}"
    )


def parse_ai_classification(data: Mapping[str, Any]) -> PermitClassification:
    """Convert the AI provider's JSON answer into a classification.

    Raises:
        AiResponseFormatError: A required field is missing or out of
            vocabulary.
    """
    try:
        category = PermitCategory(data["permitCategory"])
        return PermitClassification(
            category=category,
            jurisdiction_code=data.get("accelaPermitType") or CATEGORY_CODES[category],
            reasoning=data.get("reasoning") or "Classified by AI review",
            special_considerations=data.get("specialConsiderations") or [],
            complexity=Complexity(data["estimatedComplexity"]),
            decision_method=DecisionMethod.AI,
        )
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"AI classification response has invalid fields: {exc}"
        raise AiResponseFormatError(msg) from exc


def _with_disclaimer(
    classification: PermitClassification, disclaimer: str
) -> PermitClassification:
    return classification.model_copy(
        update={
            "special_considerations": [
                *classification.special_considerations,
                disclaimer,
            ],
        }
    )


class PermitClassifier:
    """Classifies HVAC jobs into permit categories.

    Args:
        ai_provider: Consulted for low-confidence jobs. ``None`` disables
            escalation; low-confidence jobs then carry a manual-verification
            disclaimer.
    """

    def __init__(self, ai_provider: ClassificationProvider | None = None) -> None:
        self._ai_provider = ai_provider
        if ai_provider is None:
            logger.info("Permit classifier running rules only (no AI provider)")

    @property
    def ai_enabled(self) -> bool:
        return self._ai_provider is not None

    def classify(self, request: PermitJobRequest) -> PermitClassification:
        rule_result = classify_by_rules(request)

        if is_high_confidence(request):
            logger.info(
                "Rule-based classification (high confidence): %s",
                rule_result.category,
            )
            return rule_result

        if self._ai_provider is None:
            logger.warning(
                "Low-confidence classification %s without AI review",
                rule_result.category,
            )
            return _with_disclaimer(rule_result, MANUAL_VERIFICATION_DISCLAIMER)

        return self._escalate(self._ai_provider, request, rule_result)

    def _escalate(
        self,
        provider: ClassificationProvider,
        request: PermitJobRequest,
        rule_result: PermitClassification,
    ) -> PermitClassification:
        logger.info(
            "Escalating %s/%s to AI review (rules suggested %s)",
            request.equipment_type, request.job_type, rule_result.category,
        )
        try:
            data = provider.classify(build_classification_prompt(request))
            classification = parse_ai_classification(data)
        except AiResponseFormatError:
            logger.exception("AI classification response unusable, using rules")
            return _with_disclaimer(rule_result, AI_MALFORMED_DISCLAIMER)
        except AiClassificationError:
            logger.exception("AI classification failed, using rules")
            return _with_disclaimer(rule_result, AI_UNAVAILABLE_DISCLAIMER)

        logger.info(
            "AI classification: %s (%s)",
            classification.category, classification.complexity,
        )
        return classification
