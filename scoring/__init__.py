"""scoring package - CMD score, risk stratification, percentile and recommendations."""

from scoring.assessment import assess_patient, result_progression
from scoring.cmd import (
    cognitive_composite,
    compute_cmd,
    hippocampal_normalization,
    metabolic_dysregulation_score,
    predicted_cognition,
)
from scoring.percentile import normal_cdf, percentile, round_half_away_from_zero
from scoring.recommendations import intervention_considerations, recommendations
from scoring.reference_data import (
    PROGRESSION_RISK,
    REFERENCE_DISTRIBUTIONS,
    RISK_BANDS,
    progression_profile,
    reference_for,
)
from scoring.risk import classify_category, classify_group, hazard_ratio

__all__ = [
    "assess_patient",
    "result_progression",
    "compute_cmd",
    "cognitive_composite",
    "hippocampal_normalization",
    "metabolic_dysregulation_score",
    "predicted_cognition",
    "classify_group",
    "classify_category",
    "hazard_ratio",
    "percentile",
    "normal_cdf",
    "round_half_away_from_zero",
    "recommendations",
    "intervention_considerations",
    "REFERENCE_DISTRIBUTIONS",
    "RISK_BANDS",
    "PROGRESSION_RISK",
    "reference_for",
    "progression_profile",
]
