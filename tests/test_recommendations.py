"""Tests for rule-based recommendations and intervention considerations."""
from __future__ import annotations

import numpy as np

from scoring.recommendations import intervention_considerations, recommendations


def test_item_count_dense_sample() -> None:
    for cmd in np.linspace(-4.0, 4.0, 8001):
        recs = recommendations(float(cmd))
        expected = 4 if cmd <= -0.5 else 3
        assert len(recs) == expected, cmd


def test_band_boundaries() -> None:
    assert len(recommendations(-0.5)) == 4
    assert len(recommendations(-0.4999999)) == 3
    assert recommendations(0.5)[0].startswith("Patient shows moderate cognitive resilience")
    assert recommendations(0.5000001)[0].startswith("Patient demonstrates strong cognitive resilience")
    assert recommendations(0.0)[0].startswith("Patient shows alignment")


def test_vulnerable_band_includes_caregiver_support() -> None:
    recs = recommendations(-2.0)
    assert recs[-1] == "Discuss advanced planning and caregiver support options."
    assert "3 months" in recs[1]


def test_follow_up_cadence_by_band() -> None:
    assert "annual" in recommendations(1.0)[1]
    assert "6 months" in recommendations(0.2)[1]
    assert "4 months" in recommendations(-0.2)[1]


def test_returns_fresh_list() -> None:
    first = recommendations(1.0)
    first.append("mutated")
    assert len(recommendations(1.0)) == 3


def test_never_empty_for_nan() -> None:
    assert len(recommendations(float("nan"))) == 4


def test_intervention_considerations_branches() -> None:
    high = intervention_considerations(0.8)
    moderate = intervention_considerations(0.2)
    low = intervention_considerations(-0.2)

    assert all(len(items) == 3 for items in (high, moderate, low))
    assert high[0].startswith("Leverage resilience factors")
    assert high[1].startswith("Prevention focus")
    assert moderate[1].startswith("Early intervention")
    assert low[0].startswith("Targeted interventions")
    assert low[1].startswith("Accelerated intervention")
    assert low[2].startswith("Consider more frequent cognitive assessments")
    assert high[2] == moderate[2] == "Standard monitoring schedule is appropriate."
