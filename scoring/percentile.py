"""
Percentile of a CMD value within its diagnostic group.

The standard normal CDF uses the Zelen & Severo (1964) polynomial
approximation (Abramowitz & Stegun 26.2.17), absolute error < 7.5e-8:

    t = 1 / (1 + p·|z|)
    d = φ(z) ≈ 0.3989423 · exp(−z²/2)
    Q = d·t·(b₁ + t·(b₂ + t·(b₃ + t·(b₄ + t·b₅))))

Q is the upper-tail probability for |z|; the percentile is
``100·(1 − Q)`` for z > 0 and ``100·Q`` otherwise, rounded half away from
zero to an integer.
"""
from __future__ import annotations

import logging
import math

from config import ZS_COEFFICIENTS, ZS_DENSITY, ZS_P
from schemas.assessment import Diagnosis
from scoring.reference_data import reference_for

logger = logging.getLogger(__name__)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 → 3, −2.5 → −3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # magnitude - whole is exact in binary floating point
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def normal_tail_probability(z: float) -> float:
    """Approximate ``P(Z > |z|)`` for a standard normal Z."""
    b1, b2, b3, b4, b5 = ZS_COEFFICIENTS
    t = 1.0 / (1.0 + ZS_P * abs(z))
    d = ZS_DENSITY * math.exp(-z * z / 2)
    return d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))


def normal_cdf(z: float) -> float:
    """Approximate standard normal CDF built on :func:`normal_tail_probability`."""
    q = normal_tail_probability(z)
    return 1.0 - q if z > 0 else q


def percentile(cmd: float, diagnosis: Diagnosis | str) -> int | None:
    """Percentile rank (0–100) of ``cmd`` in the diagnosis reference distribution.

    Unrecognised diagnoses use the fallback distribution. Returns None when
    ``cmd`` is NaN.
    """
    ref, _ = reference_for(diagnosis)
    z = (cmd - ref.mean) / ref.sd
    if math.isnan(z):
        logger.warning("CMD percentile undefined for non-numeric CMD %r", cmd)
        return None
    return round_half_away_from_zero(100 * normal_cdf(z))
