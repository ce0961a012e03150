"""Risk stratification of a CMD value: 3-way group, 6-way category, hazard ratio."""
from __future__ import annotations

import numpy as np

from config import HAZARD_RATIO_COEFFICIENT, RISK_GROUP_THRESHOLD, UNCLASSIFIED_LABEL
from schemas.assessment import RiskBand, RiskGroup
from scoring.reference_data import RISK_BANDS


def classify_group(cmd: float) -> RiskGroup:
    """Boundary values ±0.33 belong to the medium group."""
    if cmd > RISK_GROUP_THRESHOLD:
        return RiskGroup.HIGH_CMD
    if cmd < -RISK_GROUP_THRESHOLD:
        return RiskGroup.LOW_CMD
    return RiskGroup.MEDIUM_CMD


def risk_band(cmd: float, bands: tuple[RiskBand, ...] = RISK_BANDS) -> RiskBand | None:
    for band in bands:
        if band.contains(cmd):
            return band
    return None


def classify_category(cmd: float, bands: tuple[RiskBand, ...] = RISK_BANDS) -> str:
    """Map CMD onto its ``(lower, upper]`` risk band label.

    Returns ``"Unclassified"`` when no band matches (NaN, or a table with gaps).
    """
    band = risk_band(cmd, bands)
    return band.label if band is not None else UNCLASSIFIED_LABEL


def hazard_ratio(cmd: float) -> float:
    """Relative hazard of progression, ``exp(-0.728 · CMD)``."""
    with np.errstate(over="ignore"):
        return float(np.exp(-HAZARD_RATIO_COEFFICIENT * cmd))
