"""Single entry point of the CMD engine: assessment in, frozen result out."""
from __future__ import annotations

import logging

from schemas.assessment import CMDResult, PatientAssessment, ProgressionRiskProfile
from scoring.cmd import compute_cmd
from scoring.percentile import percentile
from scoring.recommendations import intervention_considerations, recommendations
from scoring.reference_data import progression_profile, reference_for
from scoring.risk import classify_category, classify_group, hazard_ratio

logger = logging.getLogger(__name__)


def assess_patient(assessment: PatientAssessment) -> CMDResult:
    """Score, stratify and advise on one patient assessment.

    Pure function of the assessment and the static reference tables; the
    returned result is never referenced by the engine afterwards.
    """
    scores = compute_cmd(assessment)
    cmd = scores["cmd"]

    reference, matched = reference_for(assessment.diagnosis)
    group = classify_group(cmd)

    result = CMDResult(
        cmd=cmd,
        mds=scores["mds"],
        hippocampal_normalization=scores["hippocampal_normalization"],
        cognitive_composite=scores["cognitive_composite"],
        hazard_ratio=hazard_ratio(cmd),
        risk_group=group,
        risk_category=classify_category(cmd),
        percentile=percentile(cmd, reference.diagnosis),
        reference_distribution=reference,
        diagnosis_matched=matched,
        recommendations=tuple(recommendations(cmd)),
        intervention_considerations=tuple(intervention_considerations(cmd)),
    )

    logger.info(
        "CMD computed for %s — cmd %.3f, %s, %s, percentile %s, HR %.2f",
        assessment.patient_id or "<anonymous>",
        result.cmd, result.risk_group.value, result.risk_category,
        result.percentile, result.hazard_ratio,
    )
    return result


def result_progression(result: CMDResult) -> ProgressionRiskProfile:
    """Progression statistics for the result's risk group."""
    return progression_profile(result.risk_group)
