"""End-to-end tests for ``assess_patient``."""
from __future__ import annotations

import logging
import math

import pytest
from pydantic import ValidationError

from schemas.assessment import Diagnosis, RiskGroup
from scoring import assess_patient, result_progression
from scoring.reference_data import FALLBACK_DISTRIBUTION, PROGRESSION_RISK, REFERENCE_DISTRIBUTIONS


def test_canonical_patient_result(canonical_assessment) -> None:
    result = assess_patient(canonical_assessment)

    assert result.cmd == pytest.approx(0.8223216005250079, rel=1e-12)
    assert result.hazard_ratio == pytest.approx(0.5495529633382233, rel=1e-12)
    assert result.risk_group is RiskGroup.HIGH_CMD
    assert result.risk_category == "High Resilience"
    assert result.percentile == 89
    assert result.reference_distribution.diagnosis is Diagnosis.LMCI
    assert result.diagnosis_matched is False
    assert len(result.recommendations) == 3
    assert len(result.intervention_considerations) == 3


def test_fallback_logged(canonical_assessment, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="scoring.reference_data"):
        assess_patient(canonical_assessment)
    assert "MCI" in caplog.text
    assert "LMCI" in caplog.text


def test_known_diagnosis_matches(canonical_assessment) -> None:
    ad = canonical_assessment.model_copy(update={"diagnosis": Diagnosis.AD})
    result = assess_patient(ad)
    assert result.diagnosis_matched is True
    assert result.reference_distribution == REFERENCE_DISTRIBUTIONS[Diagnosis.AD]
    assert result.percentile == 99


def test_result_is_frozen(canonical_assessment) -> None:
    result = assess_patient(canonical_assessment)
    with pytest.raises(ValidationError):
        result.cmd = 0.0


def test_repeated_calls_are_independent(canonical_assessment) -> None:
    first = assess_patient(canonical_assessment)
    second = assess_patient(canonical_assessment)
    assert first == second
    assert first is not second


def test_progression_lookup(canonical_assessment) -> None:
    result = assess_patient(canonical_assessment)
    profile = result_progression(result)
    assert profile is PROGRESSION_RISK[RiskGroup.HIGH_CMD]
    assert profile.median_survival == "5.2 years"
    assert profile.annual_conversion == "8%"


def test_progression_table_covers_all_groups() -> None:
    assert set(PROGRESSION_RISK) == set(RiskGroup)
    assert FALLBACK_DISTRIBUTION.diagnosis is Diagnosis.LMCI


def test_vulnerable_patient(canonical_fields) -> None:
    from schemas.assessment import PatientAssessment

    fields = {**canonical_fields, "diagnosis": "AD", "mmse": 18, "adas13": 40}
    result = assess_patient(PatientAssessment(**fields))
    assert result.cmd < -0.5
    assert result.risk_group is RiskGroup.LOW_CMD
    assert result.hazard_ratio > 1.0
    assert len(result.recommendations) == 4


def test_zero_icv_does_not_raise(canonical_assessment) -> None:
    result = assess_patient(canonical_assessment.model_copy(update={"intracranial_volume": 0.0}))
    assert result.cmd == -math.inf
    assert result.risk_category == "Very High Vulnerability"
    assert result.percentile == 0
    assert result.hazard_ratio == math.inf


def test_nan_measurement_flows_through(canonical_assessment) -> None:
    result = assess_patient(canonical_assessment.model_copy(update={"adas13": float("nan")}))
    assert math.isnan(result.cmd)
    assert result.percentile is None
    assert result.risk_category == "Unclassified"
    assert result.risk_group is RiskGroup.MEDIUM_CMD
