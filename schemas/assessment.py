"""
CMD assessment schemas — Pydantic data contracts for the scoring engine.

Closed clinical vocabularies (diagnosis, sex, risk group) are explicit enums so
invalid values are rejected at the boundary. Numeric measurements carry no
range constraints: NaN, infinities and implausible values are passed to the
engine untouched. Callers needing strict checks wrap the engine with
:func:`require_declared_ranges`.

All outputs are decision-support only, not a diagnosis.
"""
from __future__ import annotations

import functools
import math
from enum import Enum
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from config import DECLARED_INPUT_RANGES, DISCLAIMER

F = TypeVar("F", bound=Callable[..., Any])


# ═══════════════════════════════════════════════════════════════
# Closed vocabularies
# ═══════════════════════════════════════════════════════════════

class Diagnosis(str, Enum):
    CN = "CN"
    EMCI = "EMCI"
    LMCI = "LMCI"
    AD = "AD"


class BiologicalSex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class RiskGroup(str, Enum):
    HIGH_CMD = "High CMD (Resilient)"
    MEDIUM_CMD = "Medium CMD"
    LOW_CMD = "Low CMD (Vulnerable)"


# ═══════════════════════════════════════════════════════════════
# Input
# ═══════════════════════════════════════════════════════════════

class PatientAssessment(BaseModel):
    """Cognitive test results and biomarker panel for a single patient."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    patient_id: str = ""
    age: float
    sex: BiologicalSex
    # Unrecognised labels are kept verbatim and resolved to the fallback
    # reference distribution at lookup time.
    diagnosis: Diagnosis | str = Field(union_mode="left_to_right")
    mmse: float
    adas13: float
    hippocampal_volume: float
    intracranial_volume: float
    fdg_suvr: float
    csf_abeta42: float
    csf_tau: float
    # Carried for display only; not part of the CMD formula.
    csf_ptau181: float
    apoe4_alleles: int = Field(ge=0, le=2)


# ═══════════════════════════════════════════════════════════════
# Reference tables
# ═══════════════════════════════════════════════════════════════

class ReferenceDistribution(BaseModel):
    """CMD mean/SD observed in one diagnostic group."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    diagnosis: Diagnosis
    mean: float
    sd: float = Field(gt=0)
    color: str = "#9e9e9e"


class RiskBand(BaseModel):
    """One ``(lower, upper]`` band of the risk-category table.

    Infinite bounds are closed so that ±inf still land in the end bands.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    lower: float
    upper: float
    label: str = Field(min_length=1)
    color: str = "#9e9e9e"

    def contains(self, value: float) -> bool:
        above_lower = value > self.lower or (math.isinf(self.lower) and value == self.lower)
        return above_lower and value <= self.upper


class ProgressionRiskProfile(BaseModel):
    """Observed progression statistics for a CMD risk group."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    risk_group: RiskGroup
    median_survival_years: float = Field(gt=0)
    annual_conversion_rate: float = Field(ge=0.0, le=1.0)
    color: str = "#9e9e9e"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def median_survival(self) -> str:
        return f"{self.median_survival_years:.1f} years"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def annual_conversion(self) -> str:
        return f"{self.annual_conversion_rate * 100:.0f}%"


# ═══════════════════════════════════════════════════════════════
# Output
# ═══════════════════════════════════════════════════════════════

class CMDResult(BaseModel):
    """Scores, classification and advice for one assessment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cmd: float
    mds: float
    hippocampal_normalization: float
    cognitive_composite: float
    hazard_ratio: float
    risk_group: RiskGroup
    risk_category: str
    percentile: int | None = Field(default=None, ge=0, le=100)
    reference_distribution: ReferenceDistribution
    diagnosis_matched: bool = True
    recommendations: tuple[str, ...] = ()
    intervention_considerations: tuple[str, ...] = ()
    disclaimer: str = DISCLAIMER


# ═══════════════════════════════════════════════════════════════
# Optional declared-range pre-check
# ═══════════════════════════════════════════════════════════════

class AssessmentRangeError(ValueError):
    """Raised by the pre-check when measurements fall outside declared ranges."""

    def __init__(self, fields: dict[str, float]) -> None:
        self.fields = fields
        detail = ", ".join(
            f"{name}={value!r} (expected {DECLARED_INPUT_RANGES[name][0]:g}–"
            f"{DECLARED_INPUT_RANGES[name][1]:g})"
            for name, value in fields.items()
        )
        super().__init__(f"assessment outside declared ranges: {detail}")


def out_of_range_fields(assessment: PatientAssessment) -> dict[str, float]:
    """Return ``{field: value}`` for every measurement outside its declared range.

    Non-finite values are always reported.
    """
    bad: dict[str, float] = {}
    for name, (lo, hi) in DECLARED_INPUT_RANGES.items():
        value = float(getattr(assessment, name))
        if not (lo <= value <= hi):
            bad[name] = value
    return bad


def require_declared_ranges(func: F) -> F:
    """Decorate an engine entry point so it rejects out-of-range assessments."""

    @functools.wraps(func)
    def wrapper(assessment: PatientAssessment, *args: Any, **kwargs: Any) -> Any:
        bad = out_of_range_fields(assessment)
        if bad:
            raise AssessmentRangeError(bad)
        return func(assessment, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
