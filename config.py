from __future__ import annotations

from pathlib import Path
from typing import Final

# Project paths
PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent
OUTPUT_DIR: Final[Path] = PROJECT_ROOT / "outputs"
REPORTS_DIR: Final[Path] = OUTPUT_DIR / "reports"

# Logging
LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATEFMT: Final[str] = "%H:%M:%S"

# ── Cognitive composite (population mean / SD) ───────────────
MMSE_MEAN: Final[float] = 26.5
MMSE_SD: Final[float] = 4.2
ADAS13_MEAN: Final[float] = 20.1
ADAS13_SD: Final[float] = 8.7

# ── Biomarker standardisation ─────────────────────────────────
FDG_MEAN: Final[float] = 1.2
FDG_SD: Final[float] = 0.16
ABETA42_MEAN: Final[float] = 980.5
ABETA42_SD: Final[float] = 454.6
TAU_MEAN: Final[float] = 290.3
TAU_SD: Final[float] = 136.6

# Metabolic Dysregulation Score (elastic-net coefficients).
# Summation order fdg -> tau -> abeta is part of the numeric contract.
MDS_WEIGHTS: Final[dict[str, float]] = {
    "fdg": 0.447,
    "tau": -0.178,
    "abeta": 0.176,
}

# Predicted cognition regression
PREDICTION_COEFFICIENTS: Final[dict[str, float]] = {
    "mds": 0.817,
    "hippocampal_normalization": 322.3,
    "age": 0.003,
    "male": 0.009,
    "intercept": -1.703,
}

# ── Risk stratification ───────────────────────────────────────
RISK_GROUP_THRESHOLD: Final[float] = 0.33
HAZARD_RATIO_COEFFICIENT: Final[float] = 0.728
UNCLASSIFIED_LABEL: Final[str] = "Unclassified"

# Diagnosis key used whenever a label has no reference distribution
FALLBACK_DIAGNOSIS: Final[str] = "LMCI"

# ── Zelen & Severo (1964) normal CDF approximation ────────────
ZS_P: Final[float] = 0.2316419
ZS_DENSITY: Final[float] = 0.3989423
ZS_COEFFICIENTS: Final[tuple[float, float, float, float, float]] = (
    0.31938153,
    -0.356563782,
    1.781477937,
    -1.821255978,
    1.330274429,
)

# Chart display limits for the unbounded risk bands
RISK_BAND_DISPLAY_LIMIT: Final[float] = 3.0

# Declared clinical input ranges (inclusive), enforced only by the
# optional pre-check, never by the engine itself.
DECLARED_INPUT_RANGES: Final[dict[str, tuple[float, float]]] = {
    "age": (50.0, 95.0),
    "mmse": (0.0, 30.0),
    "adas13": (0.0, 85.0),
    "hippocampal_volume": (2000.0, 5000.0),
    "intracranial_volume": (1_000_000.0, 2_000_000.0),
    "fdg_suvr": (0.5, 2.0),
    "csf_abeta42": (200.0, 1500.0),
    "csf_tau": (50.0, 1000.0),
    "csf_ptau181": (5.0, 100.0),
}

DISCLAIMER: Final[str] = (
    "Decision-support only, not a diagnosis. CMD is a research risk-stratification "
    "indicator and must be interpreted alongside the full clinical picture."
)
