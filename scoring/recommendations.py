"""
Rule-based clinical recommendations keyed on CMD.

Every function is pure (no side-effects) and returns a fresh list of strings
that can be rendered verbatim by the report layer.
"""
from __future__ import annotations


# ───────────────────────────────────────────────────────────────
# Recommendation rules, scanned high to low: first ``cmd > floor`` wins.
# ───────────────────────────────────────────────────────────────
RECOMMENDATION_RULES: tuple[tuple[float, tuple[str, ...]], ...] = (
    (0.5, (
        "Patient demonstrates strong cognitive resilience despite biological burden.",
        "Continue current monitoring schedule (annual cognitive assessment).",
        "Consider lifestyle interventions to maintain resilience factors.",
    )),
    (0.0, (
        "Patient shows moderate cognitive resilience to biological pathology.",
        "Schedule follow-up cognitive assessment in 6 months.",
        "Consider vascular risk factor optimization.",
    )),
    (-0.5, (
        "Patient shows alignment between cognitive function and biological burden.",
        "Schedule follow-up cognitive assessment in 4 months.",
        "Consider consultation with memory disorders specialist.",
    )),
    (float("-inf"), (
        "Patient shows vulnerability to biological pathology with accelerated cognitive decline risk.",
        "Schedule follow-up cognitive assessment in 3 months.",
        "Strongly consider consultation with memory disorders specialist.",
        "Discuss advanced planning and caregiver support options.",
    )),
)

# The last rule covers cmd <= -0.5, including -inf and NaN.
_VULNERABLE_RECOMMENDATIONS = RECOMMENDATION_RULES[-1][1]


def recommendations(cmd: float) -> list[str]:
    """Ordered advisory list: 4 items when ``cmd <= -0.5``, otherwise 3."""
    for floor, items in RECOMMENDATION_RULES[:-1]:
        if cmd > floor:
            return list(items)
    return list(_VULNERABLE_RECOMMENDATIONS)


def intervention_considerations(cmd: float) -> list[str]:
    """Three personalised intervention strategies for the CMD profile."""
    if cmd > 0:
        strategy = (
            "Leverage resilience factors: Identify cognitive and lifestyle strengths "
            "that may be contributing to better-than-expected performance."
        )
    else:
        strategy = (
            "Targeted interventions: Focus on modifiable risk factors that may help "
            "improve cognitive reserve relative to biological burden."
        )

    if cmd > 0.5:
        intensity = (
            "Prevention focus: Emphasize maintenance of current cognitive status through "
            "continued engagement in cognitively stimulating activities."
        )
    elif cmd > 0:
        intensity = (
            "Early intervention: Consider cognitive training programs to strengthen "
            "compensatory mechanisms."
        )
    else:
        intensity = (
            "Accelerated intervention: Prioritize aggressive management of vascular "
            "risk factors and cognitive rehabilitation."
        )

    if cmd > 0:
        monitoring = "Standard monitoring schedule is appropriate."
    else:
        monitoring = (
            "Consider more frequent cognitive assessments (every 3-4 months) to detect "
            "early signs of decline."
        )

    return [strategy, intensity, monitoring]
