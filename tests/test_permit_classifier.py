"""Tests for the rule table, the escalation predicate and AI escalation."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from climapermit.exceptions import AiClassificationError, AiResponseFormatError
from climapermit.models.enums import (
    Complexity,
    DecisionMethod,
    EquipmentType,
    JobType,
    PermitCategory,
    PropertyType,
)
from climapermit.models.permit import JobLocation, PermitJobRequest
from climapermit.services.permit_classifier import (
    AI_MALFORMED_DISCLAIMER,
    AI_UNAVAILABLE_DISCLAIMER,
    MANUAL_VERIFICATION_DISCLAIMER,
    PermitClassifier,
    build_classification_prompt,
    classify_by_rules,
    is_high_confidence,
    parse_ai_classification,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_LOCATION = JobLocation(
    address="4202 W Spruce St",
    city="Tampa",
    county="hillsborough",
    zip_code="33607",
)


def _job(
    equipment: EquipmentType = EquipmentType.AC_UNIT,
    job_type: JobType = JobType.REPLACEMENT,
    **kwargs: Any,
) -> PermitJobRequest:
    return PermitJobRequest(
        equipment_type=equipment,
        job_type=job_type,
        location=_LOCATION,
        **kwargs,
    )


def _ai_answer(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "permitCategory": "hvac-residential-modification",
        "accelaPermitType": "BLD-MECH-MOD",
        "reasoning": "Relocating the air handler is a system modification",
        "specialConsiderations": ["Verify attic clearance"],
        "estimatedComplexity": "moderate",
    }
    data.update(overrides)
    return data


def _provider(answer: dict[str, Any] | None = None, error: Exception | None = None) -> MagicMock:
    provider = MagicMock()
    if error is not None:
        provider.classify.side_effect = error
    else:
        provider.classify.return_value = answer if answer is not None else _ai_answer()
    return provider


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


class TestClassifyByRules:
    def test_furnace_replacement_is_simple(self) -> None:
        result = classify_by_rules(
            _job(
                EquipmentType.FURNACE,
                btu=80_000,
                tonnage=3,
                property_type=PropertyType.RESIDENTIAL,
            )
        )
        assert result.category is PermitCategory.RESIDENTIAL_REPLACEMENT
        assert result.jurisdiction_code == "BLD-HVAC-RES-REPL"
        assert result.complexity is Complexity.SIMPLE
        assert result.special_considerations == []
        assert result.decision_method is DecisionMethod.RULES

    def test_commercial_is_complex(self) -> None:
        result = classify_by_rules(
            _job(
                EquipmentType.HVAC_SYSTEM,
                JobType.NEW_INSTALLATION,
                tonnage=10,
                property_type=PropertyType.COMMERCIAL,
            )
        )
        assert result.category is PermitCategory.COMMERCIAL
        assert result.jurisdiction_code == "BLD-HVAC-COM"
        assert result.complexity is Complexity.COMPLEX
        assert len(result.special_considerations) >= 2
        assert "Requires sealed engineering drawings" in result.special_considerations

    def test_industrial_counts_as_commercial(self) -> None:
        result = classify_by_rules(_job(property_type=PropertyType.INDUSTRIAL))
        assert result.category is PermitCategory.COMMERCIAL

    def test_new_heat_pump_needs_load_calculation(self) -> None:
        result = classify_by_rules(
            _job(
                EquipmentType.HEAT_PUMP,
                JobType.NEW_INSTALLATION,
                tonnage=4,
                property_type=PropertyType.RESIDENTIAL,
            )
        )
        assert result.category is PermitCategory.RESIDENTIAL_NEW
        assert result.jurisdiction_code == "BLD-HVAC-RES-NEW"
        assert result.complexity is Complexity.MODERATE
        assert any("load calculation" in c for c in result.special_considerations)

    def test_ductwork(self) -> None:
        result = classify_by_rules(_job(EquipmentType.DUCTWORK, JobType.MODIFICATION))
        assert result.category is PermitCategory.RESIDENTIAL_DUCTWORK
        assert result.jurisdiction_code == "BLD-MECH-DUCTWORK"
        assert result.complexity is Complexity.MODERATE

    def test_large_replacement_is_moderate(self) -> None:
        result = classify_by_rules(_job(tonnage=6))
        assert result.category is PermitCategory.RESIDENTIAL_REPLACEMENT
        assert result.complexity is Complexity.MODERATE
        assert result.special_considerations == [
            "Large system (>5 tons) may require additional review"
        ]

    @pytest.mark.parametrize("job_type", [JobType.MODIFICATION, JobType.REPAIR])
    def test_modification_and_repair(self, job_type: JobType) -> None:
        result = classify_by_rules(_job(job_type=job_type))
        assert result.category is PermitCategory.RESIDENTIAL_MODIFICATION
        assert result.jurisdiction_code == "BLD-MECH-MOD"
        assert "Manual J not required for minor modifications" in (
            result.special_considerations
        )

    def test_high_btu_adds_inspection_note(self) -> None:
        result = classify_by_rules(_job(EquipmentType.FURNACE, btu=120_000))
        assert result.special_considerations[-1] == (
            "High BTU system may require additional inspection"
        )

    def test_btu_at_threshold_adds_nothing(self) -> None:
        result = classify_by_rules(_job(EquipmentType.FURNACE, btu=100_000))
        assert result.special_considerations == []


# ---------------------------------------------------------------------------
# Confidence predicate
# ---------------------------------------------------------------------------


class TestIsHighConfidence:
    @pytest.mark.parametrize(
        "job",
        [
            _job(property_type=PropertyType.COMMERCIAL, tonnage=20),
            _job(EquipmentType.DUCTWORK, JobType.REPAIR),
            _job(property_type=PropertyType.RESIDENTIAL, tonnage=5),
            _job(property_type=PropertyType.RESIDENTIAL),
            _job(EquipmentType.HEAT_PUMP, JobType.NEW_INSTALLATION, btu=60_000),
        ],
    )
    def test_clear_cut_jobs(self, job: PermitJobRequest) -> None:
        assert is_high_confidence(job)

    def test_commercial_beats_long_details(self) -> None:
        job = _job(
            property_type=PropertyType.COMMERCIAL,
            job_type=JobType.MODIFICATION,
            additional_details="x" * 200,
        )
        assert is_high_confidence(job)

    def test_residential_replacement_beats_high_btu(self) -> None:
        job = _job(
            EquipmentType.FURNACE,
            property_type=PropertyType.RESIDENTIAL,
            btu=200_000,
        )
        assert is_high_confidence(job)

    @pytest.mark.parametrize(
        "job",
        [
            _job(tonnage=6),
            _job(job_type=JobType.MODIFICATION),
            _job(job_type=JobType.REPAIR),
            _job(EquipmentType.FURNACE, JobType.NEW_INSTALLATION, btu=160_000),
            _job(
                EquipmentType.AC_UNIT,
                JobType.NEW_INSTALLATION,
                additional_details="Replacing the air handler and moving it from the attic to the garage",
            ),
        ],
    )
    def test_ambiguous_jobs(self, job: PermitJobRequest) -> None:
        assert not is_high_confidence(job)

    def test_replacement_without_property_type_and_long_details(self) -> None:
        job = _job(additional_details="y" * 51)
        assert not is_high_confidence(job)


# ---------------------------------------------------------------------------
# Prompt and answer parsing
# ---------------------------------------------------------------------------


class TestPromptAndParsing:
    def test_prompt_includes_every_attribute(self) -> None:
        prompt = build_classification_prompt(
            _job(
                EquipmentType.HEAT_PUMP,
                JobType.MODIFICATION,
                btu=48_000,
                tonnage=4,
                property_type=PropertyType.RESIDENTIAL,
                additional_details="Add a zone damper",
            )
        )
        for fragment in (
            "Equipment Type: heat-pump",
            "Job Type: modification",
            "BTU: 48000",
            "Tonnage: 4.0",
            "4202 W Spruce St, Tampa, hillsborough County, FL 33607",
            "Property Type: residential",
            "Additional Details: Add a zone damper",
            "hvac-residential-ductwork",
            "simple|moderate|complex",
        ):
            assert fragment in prompt

    def test_prompt_placeholders_for_missing_values(self) -> None:
        prompt = build_classification_prompt(_job(job_type=JobType.REPAIR))
        assert "BTU: Not specified" in prompt
        assert "Tonnage: Not specified" in prompt
        assert "Additional Details: None" in prompt

    def test_parse_valid_answer(self) -> None:
        result = parse_ai_classification(_ai_answer())
        assert result.category is PermitCategory.RESIDENTIAL_MODIFICATION
        assert result.jurisdiction_code == "BLD-MECH-MOD"
        assert result.decision_method is DecisionMethod.AI
        assert result.special_considerations == ["Verify attic clearance"]

    def test_parse_fills_optional_fields(self) -> None:
        result = parse_ai_classification({
            "permitCategory": "hvac-residential-new",
            "estimatedComplexity": "complex",
        })
        assert result.jurisdiction_code == "BLD-HVAC-RES-NEW"
        assert result.reasoning == "Classified by AI review"
        assert result.special_considerations == []

    @pytest.mark.parametrize(
        "answer",
        [
            _ai_answer(permitCategory="hvac-spaceship"),
            _ai_answer(estimatedComplexity="trivial"),
            {"estimatedComplexity": "simple"},
            _ai_answer(specialConsiderations="not a list"),
        ],
    )
    def test_parse_rejects_bad_answers(self, answer: dict[str, Any]) -> None:
        with pytest.raises(AiResponseFormatError):
            parse_ai_classification(answer)


# ---------------------------------------------------------------------------
# PermitClassifier
# ---------------------------------------------------------------------------


class TestPermitClassifier:
    def test_high_confidence_never_calls_ai(self) -> None:
        provider = _provider()
        classifier = PermitClassifier(ai_provider=provider)
        result = classifier.classify(_job(property_type=PropertyType.RESIDENTIAL, tonnage=3))
        assert result.decision_method is DecisionMethod.RULES
        provider.classify.assert_not_called()

    def test_low_confidence_uses_ai_answer(self) -> None:
        provider = _provider()
        classifier = PermitClassifier(ai_provider=provider)
        result = classifier.classify(_job(job_type=JobType.MODIFICATION))
        provider.classify.assert_called_once()
        assert result.decision_method is DecisionMethod.AI
        assert result.reasoning == "Relocating the air handler is a system modification"

    def test_prompt_sent_to_provider(self) -> None:
        provider = _provider()
        job = _job(job_type=JobType.REPAIR, btu=30_000)
        PermitClassifier(ai_provider=provider).classify(job)
        provider.classify.assert_called_once_with(build_classification_prompt(job))

    def test_without_ai_adds_manual_disclaimer(self) -> None:
        classifier = PermitClassifier()
        assert not classifier.ai_enabled
        result = classifier.classify(_job(job_type=JobType.MODIFICATION))
        assert result.decision_method is DecisionMethod.RULES
        assert result.special_considerations[-1] == MANUAL_VERIFICATION_DISCLAIMER

    def test_provider_failure_falls_back_to_rules(self) -> None:
        classifier = PermitClassifier(
            ai_provider=_provider(error=AiClassificationError("timeout"))
        )
        result = classifier.classify(_job(tonnage=6))
        assert result.decision_method is DecisionMethod.RULES
        assert result.category is PermitCategory.RESIDENTIAL_REPLACEMENT
        assert result.special_considerations[-1] == AI_UNAVAILABLE_DISCLAIMER

    def test_unparseable_provider_output_falls_back(self) -> None:
        classifier = PermitClassifier(
            ai_provider=_provider(error=AiResponseFormatError("no JSON"))
        )
        result = classifier.classify(_job(job_type=JobType.REPAIR))
        assert result.special_considerations[-1] == AI_MALFORMED_DISCLAIMER

    def test_out_of_vocabulary_answer_falls_back(self) -> None:
        classifier = PermitClassifier(
            ai_provider=_provider(_ai_answer(permitCategory="plumbing"))
        )
        result = classifier.classify(_job(job_type=JobType.REPAIR))
        assert result.decision_method is DecisionMethod.RULES
        assert result.category is PermitCategory.RESIDENTIAL_MODIFICATION
        assert result.special_considerations[-1] == AI_MALFORMED_DISCLAIMER

    def test_unexpected_errors_propagate(self) -> None:
        classifier = PermitClassifier(ai_provider=_provider(error=RuntimeError("bug")))
        with pytest.raises(RuntimeError):
            classifier.classify(_job(job_type=JobType.REPAIR))

    def test_deterministic_for_rules_path(self) -> None:
        classifier = PermitClassifier()
        job = _job(EquipmentType.FURNACE, btu=80_000, tonnage=3)
        assert classifier.classify(job) == classifier.classify(job)
