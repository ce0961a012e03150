from __future__ import annotations

from typing import Any

import pytest

from schemas.assessment import PatientAssessment


@pytest.fixture
def canonical_fields() -> dict[str, Any]:
    return {
        "patient_id": "P001",
        "age": 65,
        "sex": "Male",
        "diagnosis": "MCI",
        "mmse": 26,
        "adas13": 18,
        "hippocampal_volume": 3500,
        "intracranial_volume": 1_500_000,
        "fdg_suvr": 1.2,
        "csf_abeta42": 800,
        "csf_tau": 250,
        "csf_ptau181": 25,
        "apoe4_alleles": 0,
    }


@pytest.fixture
def canonical_assessment(canonical_fields: dict[str, Any]) -> PatientAssessment:
    return PatientAssessment(**canonical_fields)
