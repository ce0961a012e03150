"""
CMD assessment report generator.

Produces a structured JSON payload and a Markdown rendering covering:
- Patient demographics and biomarker panel
- CMD score, risk category, risk group, percentile and hazard ratio
- Progression statistics for the risk group
- Recommendations and intervention considerations

Also exposes chart-ready tables for the reference distributions and the
risk bands. All outputs: decision-support only, not a diagnosis.
"""
from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from config import DISCLAIMER, RISK_BAND_DISPLAY_LIMIT
from schemas.assessment import CMDResult, PatientAssessment
from scoring.reference_data import REFERENCE_DISTRIBUTIONS, RISK_BANDS, progression_profile

logger = logging.getLogger(__name__)


# ───────────────────────────────────────────────────────────────
# Chart tables
# ───────────────────────────────────────────────────────────────
def reference_distribution_frame() -> pd.DataFrame:
    """One row per diagnostic group: mean, sd and the ±1 SD interval."""
    rows = [
        {
            "diagnosis": ref.diagnosis.value,
            "mean": ref.mean,
            "sd": ref.sd,
            "lower": ref.mean - ref.sd,
            "upper": ref.mean + ref.sd,
            "color": ref.color,
        }
        for ref in REFERENCE_DISTRIBUTIONS.values()
    ]
    return pd.DataFrame(rows)


def risk_band_frame(display_limit: float = RISK_BAND_DISPLAY_LIMIT) -> pd.DataFrame:
    """Risk bands ordered high to low, unbounded ends clipped to ±display_limit."""
    df = pd.DataFrame(
        [
            {"label": b.label, "cmd_min": b.lower, "cmd_max": b.upper, "color": b.color}
            for b in reversed(RISK_BANDS)
        ]
    )
    df[["cmd_min", "cmd_max"]] = np.clip(
        df[["cmd_min", "cmd_max"]].to_numpy(dtype=float), -display_limit, display_limit
    )
    return df


# ───────────────────────────────────────────────────────────────
# Narrative
# ───────────────────────────────────────────────────────────────
def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _diagnosis_label(assessment: PatientAssessment) -> str:
    return getattr(assessment.diagnosis, "value", assessment.diagnosis)


def risk_assessment_summary(assessment: PatientAssessment, result: CMDResult) -> str:
    """Plain-language summary of the CMD result for the report body."""
    if result.percentile is None:
        rank = "could not be ranked against"
    else:
        rank = f"ranks in the {_ordinal(result.percentile)} percentile for cognitive resilience among"
    if math.isnan(result.cmd):
        performance = ""
    elif result.cmd == 0:
        performance = ", with cognitive performance as expected for their biological burden"
    else:
        direction = "better" if result.cmd > 0 else "worse"
        performance = f", with cognitive performance {direction} than expected for their biological burden"
    return (
        f"This patient's CMD score of {result.cmd:.2f} places them in the "
        f"{result.risk_group.value} category ({result.risk_category}){performance}. "
        f"Compared to patients with {_diagnosis_label(assessment)}, this patient {rank} "
        f"the {result.reference_distribution.diagnosis.value} reference group. "
        f"The hazard ratio for progression to Alzheimer's Disease is "
        f"{result.hazard_ratio:.2f} compared to the average patient with similar "
        f"biomarker burden."
    )


# ───────────────────────────────────────────────────────────────
# Report payload
# ───────────────────────────────────────────────────────────────
def _json_safe(value: float) -> float | None:
    return value if math.isfinite(value) else None


def build_assessment_report(assessment: PatientAssessment, result: CMDResult) -> dict[str, Any]:
    """Assemble a JSON-serialisable report for one assessment."""
    progression = progression_profile(result.risk_group)
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "patient": {
            "patient_id": assessment.patient_id or "N/A",
            "age": _json_safe(assessment.age),
            "sex": assessment.sex.value,
            "diagnosis": _diagnosis_label(assessment),
            "apoe4_alleles": assessment.apoe4_alleles,
        },
        "cognition": {
            "mmse": _json_safe(assessment.mmse),
            "adas13": _json_safe(assessment.adas13),
        },
        "biomarkers": {
            "hippocampal_volume": _json_safe(assessment.hippocampal_volume),
            "intracranial_volume": _json_safe(assessment.intracranial_volume),
            "fdg_suvr": _json_safe(assessment.fdg_suvr),
            "csf_abeta42": _json_safe(assessment.csf_abeta42),
            "csf_tau": _json_safe(assessment.csf_tau),
            "csf_ptau181": _json_safe(assessment.csf_ptau181),
        },
        "results": {
            "cmd": _json_safe(result.cmd),
            "mds": _json_safe(result.mds),
            "hippocampal_normalization": _json_safe(result.hippocampal_normalization),
            "cognitive_composite": _json_safe(result.cognitive_composite),
            "hazard_ratio": _json_safe(result.hazard_ratio),
            "risk_category": result.risk_category,
            "risk_group": result.risk_group.value,
            "percentile": result.percentile,
            "reference_diagnosis": result.reference_distribution.diagnosis.value,
            "diagnosis_matched": result.diagnosis_matched,
        },
        "progression": {
            "median_survival": progression.median_survival,
            "annual_conversion": progression.annual_conversion,
        },
        "summary": risk_assessment_summary(assessment, result),
        "recommendations": list(result.recommendations),
        "intervention_considerations": list(result.intervention_considerations),
        "disclaimer": DISCLAIMER,
    }


def _fmt(value: Any, spec: str = ".2f") -> str:
    if value is None:
        return "N/A"
    if isinstance(value, float):
        return format(value, spec)
    return str(value)


def render_markdown(report: dict[str, Any]) -> str:
    """Render a report payload from :func:`build_assessment_report` as Markdown."""
    patient = report["patient"]
    res = report["results"]
    prog = report["progression"]
    bio = report["biomarkers"]

    sections: list[str] = []
    sections.append("# CMD Clinical Assessment Report")
    sections.append("Cognitive-Metabolic Decoupling for Alzheimer's Disease Risk Stratification")
    sections.append("")
    sections.append(f"**Generated:** {report['generated_at']}")
    sections.append(f"**Disclaimer:** {report['disclaimer']}")
    sections.append("")

    sections.append("## 1. Patient Information")
    sections.append(f"- **Patient ID:** {patient['patient_id']}")
    sections.append(f"- **Age:** {_fmt(patient['age'], '.0f')}")
    sections.append(f"- **Sex:** {patient['sex']}")
    sections.append(f"- **Diagnosis:** {patient['diagnosis']}")
    sections.append(f"- **APOE-ε4 alleles:** {patient['apoe4_alleles']}")
    sections.append("")

    sections.append("## 2. Cognitive Assessment and Biomarkers")
    sections.append(f"- **MMSE:** {_fmt(report['cognition']['mmse'], 'g')}")
    sections.append(f"- **ADAS-13:** {_fmt(report['cognition']['adas13'], 'g')}")
    sections.append(f"- **Hippocampal volume:** {_fmt(bio['hippocampal_volume'], 'g')} mm³")
    sections.append(f"- **Intracranial volume:** {_fmt(bio['intracranial_volume'], 'g')} mm³")
    sections.append(f"- **FDG-PET SUVR:** {_fmt(bio['fdg_suvr'], 'g')}")
    sections.append(f"- **CSF Aβ42:** {_fmt(bio['csf_abeta42'], 'g')} pg/mL")
    sections.append(f"- **CSF total tau:** {_fmt(bio['csf_tau'], 'g')} pg/mL")
    sections.append(f"- **CSF p-tau181:** {_fmt(bio['csf_ptau181'], 'g')} pg/mL")
    sections.append("")

    sections.append("## 3. CMD Assessment Results")
    sections.append(f"- **CMD score:** {_fmt(res['cmd'])}")
    sections.append(f"- **Risk category:** {res['risk_category']}")
    sections.append(f"- **Risk group:** {res['risk_group']}")
    percentile = res["percentile"]
    sections.append(
        f"- **Percentile:** {_ordinal(percentile) + ' percentile' if percentile is not None else 'N/A'}"
        f" (reference: {res['reference_diagnosis']})"
    )
    sections.append(f"- **Hazard ratio:** {_fmt(res['hazard_ratio'])}")
    sections.append(f"- **Metabolic dysregulation score:** {_fmt(res['mds'], '.3f')}")
    sections.append(f"- **Cognitive composite:** {_fmt(res['cognitive_composite'], '.3f')}")
    sections.append(f"- **Hippocampal normalization:** {_fmt(res['hippocampal_normalization'], '.6f')}")
    sections.append("")

    sections.append("## 4. Clinical Interpretation")
    sections.append(report["summary"])
    sections.append("")

    sections.append("## 5. Recommendations")
    for i, rec in enumerate(report["recommendations"], start=1):
        sections.append(f"{i}. {rec}")
    sections.append("")

    sections.append("### Intervention Considerations")
    for item in report["intervention_considerations"]:
        sections.append(f"- {item}")
    sections.append("")

    sections.append("## 6. Progression Risk")
    sections.append(f"- **Median time to progression:** {prog['median_survival']}")
    sections.append(f"- **Annual conversion risk:** {prog['annual_conversion']}")
    sections.append("")
    sections.append("---")
    sections.append("*This report is auto-generated. Decision-support only, not a diagnosis.*")
    return "\n".join(sections)


def generate_assessment_report(
    output_dir: Path,
    assessment: PatientAssessment,
    result: CMDResult,
) -> dict[str, Path]:
    """Write the assessment report as Markdown and JSON under ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    report = build_assessment_report(assessment, result)
    safe_id = re.sub(r"[^A-Za-z0-9_.-]", "_", assessment.patient_id) or "anonymous"
    stem = f"cmd_assessment_{safe_id}"

    md_path = output_dir / f"{stem}.md"
    md_path.write_text(render_markdown(report), encoding="utf-8")

    json_path = output_dir / f"{stem}.json"
    json_path.write_text(json.dumps(report, indent=2, default=str, allow_nan=False), encoding="utf-8")

    logger.info("Generated CMD assessment report: %s, %s", md_path, json_path)
    return {"markdown": md_path, "json": json_path}
