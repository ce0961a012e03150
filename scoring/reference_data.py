"""
Static reference tables for CMD interpretation.

Built once at import and exposed read-only: per-diagnosis CMD distributions,
the six-band risk-category table and per-risk-group progression statistics.
"""
from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Mapping

from config import FALLBACK_DIAGNOSIS
from schemas.assessment import (
    Diagnosis,
    ProgressionRiskProfile,
    ReferenceDistribution,
    RiskBand,
    RiskGroup,
)

logger = logging.getLogger(__name__)


# ───────────────────────────────────────────────────────────────
# CMD distribution by diagnostic group
# ───────────────────────────────────────────────────────────────
REFERENCE_DISTRIBUTIONS: Mapping[Diagnosis, ReferenceDistribution] = MappingProxyType({
    Diagnosis.CN:   ReferenceDistribution(diagnosis=Diagnosis.CN,   mean=0.258,  sd=0.516, color="#2E86AB"),
    Diagnosis.EMCI: ReferenceDistribution(diagnosis=Diagnosis.EMCI, mean=0.109,  sd=0.541, color="#A23B72"),
    Diagnosis.LMCI: ReferenceDistribution(diagnosis=Diagnosis.LMCI, mean=0.143,  sd=0.553, color="#F18F01"),
    Diagnosis.AD:   ReferenceDistribution(diagnosis=Diagnosis.AD,   mean=-0.699, sd=0.602, color="#C73E1D"),
})

FALLBACK_DISTRIBUTION: ReferenceDistribution = REFERENCE_DISTRIBUTIONS[Diagnosis(FALLBACK_DIAGNOSIS)]


# ───────────────────────────────────────────────────────────────
# Risk categories, ordered low to high; (lower, upper]
# ───────────────────────────────────────────────────────────────
RISK_BANDS: tuple[RiskBand, ...] = (
    RiskBand(lower=-math.inf, upper=-1.0,     label="Very High Vulnerability", color="#d73027"),
    RiskBand(lower=-1.0,      upper=-0.5,     label="High Vulnerability",      color="#f46d43"),
    RiskBand(lower=-0.5,      upper=0.0,      label="Moderate Vulnerability",  color="#fdae61"),
    RiskBand(lower=0.0,       upper=0.5,      label="Moderate Resilience",     color="#a6d96a"),
    RiskBand(lower=0.5,       upper=1.0,      label="High Resilience",         color="#66bd63"),
    RiskBand(lower=1.0,       upper=math.inf, label="Very High Resilience",    color="#1a9850"),
)


# ───────────────────────────────────────────────────────────────
# Progression statistics by risk group
# ───────────────────────────────────────────────────────────────
PROGRESSION_RISK: Mapping[RiskGroup, ProgressionRiskProfile] = MappingProxyType({
    RiskGroup.HIGH_CMD: ProgressionRiskProfile(
        risk_group=RiskGroup.HIGH_CMD,
        median_survival_years=5.2,
        annual_conversion_rate=0.08,
        color="#2E86AB",
    ),
    RiskGroup.MEDIUM_CMD: ProgressionRiskProfile(
        risk_group=RiskGroup.MEDIUM_CMD,
        median_survival_years=3.1,
        annual_conversion_rate=0.18,
        color="#FDAE61",
    ),
    RiskGroup.LOW_CMD: ProgressionRiskProfile(
        risk_group=RiskGroup.LOW_CMD,
        median_survival_years=1.3,
        annual_conversion_rate=0.42,
        color="#D7191C",
    ),
})


def validate_band_table(bands: tuple[RiskBand, ...]) -> None:
    """Raise ValueError unless ``bands`` partition the real line without gaps."""
    if not bands:
        raise ValueError("risk band table is empty")
    if bands[0].lower != -math.inf or bands[-1].upper != math.inf:
        raise ValueError("risk band table must be unbounded at both ends")
    for band in bands:
        if not band.lower < band.upper:
            raise ValueError(f"risk band {band.label!r} is empty")
    for prev, nxt in zip(bands, bands[1:]):
        if prev.upper != nxt.lower:
            raise ValueError(
                f"risk bands {prev.label!r} and {nxt.label!r} are not contiguous "
                f"({prev.upper} != {nxt.lower})"
            )


validate_band_table(RISK_BANDS)


def resolve_diagnosis(diagnosis: Diagnosis | str) -> Diagnosis | None:
    """Map a diagnosis label onto the closed enum, or None when unrecognised."""
    if isinstance(diagnosis, Diagnosis):
        return diagnosis
    try:
        return Diagnosis(diagnosis)
    except ValueError:
        return None


def reference_for(diagnosis: Diagnosis | str) -> tuple[ReferenceDistribution, bool]:
    """Return ``(distribution, matched)`` for a diagnosis label.

    Unrecognised labels resolve to the LMCI distribution with ``matched=False``.
    """
    resolved = resolve_diagnosis(diagnosis)
    if resolved is None:
        logger.warning(
            "No CMD reference distribution for diagnosis %r; using %s",
            diagnosis, FALLBACK_DISTRIBUTION.diagnosis.value,
        )
        return FALLBACK_DISTRIBUTION, False
    return REFERENCE_DISTRIBUTIONS[resolved], True


def progression_profile(risk_group: RiskGroup) -> ProgressionRiskProfile:
    return PROGRESSION_RISK[risk_group]
