from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from config import LOG_DATEFMT, LOG_FORMAT, REPORTS_DIR
from reports.clinical_report import build_assessment_report, generate_assessment_report
from schemas.assessment import AssessmentRangeError, PatientAssessment, require_declared_ranges
from scoring.assessment import assess_patient

logger = logging.getLogger("CMD")

# Default patient pre-filled on the assessment form
DEFAULT_ASSESSMENT: dict[str, Any] = {
    "patient_id": "",
    "age": 65.0,
    "sex": "Male",
    "diagnosis": "MCI",
    "mmse": 26.0,
    "adas13": 18.0,
    "hippocampal_volume": 3500.0,
    "intracranial_volume": 1_500_000.0,
    "fdg_suvr": 1.2,
    "csf_abeta42": 800.0,
    "csf_tau": 250.0,
    "csf_ptau181": 25.0,
    "apoe4_alleles": 0,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Cognitive-Metabolic Decoupling (CMD) assessment")
    p.add_argument("--input", type=str, default=None,
                   help="JSON file with assessment fields (flags override it)")
    p.add_argument("--patient-id", type=str, default=None)
    p.add_argument("--age", type=float, default=None, help="Age in years")
    p.add_argument("--sex", choices=["Male", "Female"], default=None)
    p.add_argument("--diagnosis", type=str, default=None, help="CN, EMCI, LMCI or AD")
    p.add_argument("--mmse", type=float, default=None, help="MMSE score (0-30)")
    p.add_argument("--adas13", type=float, default=None, help="ADAS-13 score (0-85)")
    p.add_argument("--hippocampal-volume", type=float, default=None, help="Hippocampal volume (mm³)")
    p.add_argument("--intracranial-volume", type=float, default=None, help="Intracranial volume (mm³)")
    p.add_argument("--fdg-suvr", type=float, default=None, help="FDG-PET SUVR")
    p.add_argument("--csf-abeta42", type=float, default=None, help="CSF Aβ42 (pg/mL)")
    p.add_argument("--csf-tau", type=float, default=None, help="CSF total tau (pg/mL)")
    p.add_argument("--csf-ptau181", type=float, default=None, help="CSF p-tau181 (pg/mL)")
    p.add_argument("--apoe4-alleles", type=int, choices=[0, 1, 2], default=None)
    p.add_argument("--strict", action="store_true",
                   help="Reject measurements outside the declared clinical ranges")
    p.add_argument("--output-dir", type=str, nargs="?", const=str(REPORTS_DIR), default=None,
                   help=f"Write Markdown/JSON report here (bare flag: {REPORTS_DIR})")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    return p.parse_args(argv)


def build_assessment_fields(args: argparse.Namespace) -> dict[str, Any]:
    """Merge defaults, the optional JSON input file and explicit flags."""
    fields = dict(DEFAULT_ASSESSMENT)
    if args.input:
        payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"{args.input}: expected a JSON object, got {type(payload).__name__}")
        fields.update(payload)
    for name in DEFAULT_ASSESSMENT:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    return fields


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    engine = require_declared_ranges(assess_patient) if args.strict else assess_patient

    try:
        assessment = PatientAssessment.model_validate(build_assessment_fields(args))
        result = engine(assessment)
    except (OSError, json.JSONDecodeError, ValidationError, AssessmentRangeError, ValueError) as exc:
        logger.error("Invalid assessment: %s", exc)
        return 2

    report = build_assessment_report(assessment, result)
    print(json.dumps(report, indent=2, default=str, allow_nan=False))

    if args.output_dir:
        paths = generate_assessment_report(Path(args.output_dir), assessment, result)
        logger.info("Report written to %s", paths["markdown"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
