"""
CMD — Cognitive-Metabolic Decoupling
=====================================

Mathematical Definition
-----------------------
CMD is the residual of the observed cognitive composite after regressing
out biological burden:

    cog   = ( z(MMSE) − z(ADAS-13) ) / 2
    hipp  = hippocampal volume / intracranial volume
    MDS   = 0.447·z(FDG) − 0.178·z(tau) + 0.176·z(Aβ42)
    ĉog   = 0.817·MDS + 322.3·hipp + 0.003·age + 0.009·male − 1.703

    CMD   = cog − ĉog

Positive CMD means cognition is better than the biomarker profile predicts
(resilience); negative CMD means worse (vulnerability).

No clamping or validation is applied. Non-finite or implausible inputs
propagate through the formulas as inf/NaN. CSF p-tau181 and APOE-ε4 are
display-only and do not enter the score.
"""
from __future__ import annotations

import numpy as np

from config import (
    ABETA42_MEAN,
    ABETA42_SD,
    ADAS13_MEAN,
    ADAS13_SD,
    FDG_MEAN,
    FDG_SD,
    MDS_WEIGHTS,
    MMSE_MEAN,
    MMSE_SD,
    PREDICTION_COEFFICIENTS,
    TAU_MEAN,
    TAU_SD,
)
from schemas.assessment import BiologicalSex, PatientAssessment


def _z(value: float, mean: float, sd: float) -> float:
    return (value - mean) / sd


def cognitive_composite(mmse: float, adas13: float) -> float:
    """Average of standardised MMSE and sign-inverted standardised ADAS-13."""
    mmse_z = _z(mmse, MMSE_MEAN, MMSE_SD)
    # higher ADAS-13 = worse cognition
    adas13_z = -_z(adas13, ADAS13_MEAN, ADAS13_SD)
    return (mmse_z + adas13_z) / 2


def hippocampal_normalization(hippocampal_volume: float, intracranial_volume: float) -> float:
    """Hippocampal volume as a fraction of intracranial volume.

    A zero ICV yields inf (or NaN for 0/0) instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(hippocampal_volume), np.float64(intracranial_volume)))


def metabolic_dysregulation_score(fdg_suvr: float, csf_abeta42: float, csf_tau: float) -> float:
    """Weighted combination of standardised FDG, tau and Aβ42."""
    fdg_z = _z(fdg_suvr, FDG_MEAN, FDG_SD)
    abeta_z = _z(csf_abeta42, ABETA42_MEAN, ABETA42_SD)
    tau_z = _z(csf_tau, TAU_MEAN, TAU_SD)
    w = MDS_WEIGHTS
    return w["fdg"] * fdg_z + w["tau"] * tau_z + w["abeta"] * abeta_z


def predicted_cognition(
    mds: float,
    hipp_norm: float,
    age: float,
    sex: BiologicalSex,
) -> float:
    """Cognitive composite expected from biological burden and demographics."""
    c = PREDICTION_COEFFICIENTS
    male = 1.0 if sex == BiologicalSex.MALE else 0.0
    return (
        c["mds"] * mds
        + c["hippocampal_normalization"] * hipp_norm
        + c["age"] * age
        + c["male"] * male
        + c["intercept"]
    )


def compute_cmd(assessment: PatientAssessment) -> dict[str, float]:
    """Compute CMD and its intermediate scores for one assessment.

    Returns
    -------
    dict with keys: cmd, mds, hippocampal_normalization, cognitive_composite,
    predicted_cognition.
    """
    cog = cognitive_composite(assessment.mmse, assessment.adas13)
    hipp = hippocampal_normalization(assessment.hippocampal_volume, assessment.intracranial_volume)
    mds = metabolic_dysregulation_score(assessment.fdg_suvr, assessment.csf_abeta42, assessment.csf_tau)
    predicted = predicted_cognition(mds, hipp, assessment.age, assessment.sex)

    return {
        "cmd": cog - predicted,
        "mds": mds,
        "hippocampal_normalization": hipp,
        "cognitive_composite": cog,
        "predicted_cognition": predicted,
    }
