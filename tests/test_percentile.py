"""
Tests for the diagnosis-relative CMD percentile.

Validates:
- z == 0 maps to exactly 50 for every diagnostic group
- Monotone non-decreasing in CMD
- Half-away-from-zero rounding at exact .5 boundaries
- Canonical fallback distribution for unknown diagnoses
- Agreement of the polynomial CDF with known normal quantiles
"""
from __future__ import annotations

import math

import numpy as np
import pytest

from schemas.assessment import Diagnosis
from scoring.percentile import normal_cdf, percentile, round_half_away_from_zero
from scoring.reference_data import REFERENCE_DISTRIBUTIONS


@pytest.mark.parametrize("diagnosis", list(Diagnosis))
def test_group_mean_is_fiftieth_percentile(diagnosis: Diagnosis) -> None:
    ref = REFERENCE_DISTRIBUTIONS[diagnosis]
    assert percentile(ref.mean, diagnosis) == 50


@pytest.mark.parametrize("diagnosis", list(Diagnosis))
def test_percentile_monotone_in_cmd(diagnosis: Diagnosis) -> None:
    values = [percentile(float(c), diagnosis) for c in np.linspace(-5.0, 5.0, 2001)]
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert values[0] == 0
    assert values[-1] == 100


def test_canonical_patient_percentiles() -> None:
    cmd = 0.8223216005250079
    assert percentile(cmd, "LMCI") == 89
    assert percentile(cmd, Diagnosis.CN) == 86
    assert percentile(cmd, Diagnosis.EMCI) == 91
    assert percentile(cmd, Diagnosis.AD) == 99


def test_unknown_diagnosis_uses_lmci() -> None:
    for cmd in (-1.2, 0.0, 0.4, 1.7):
        assert percentile(cmd, "MCI") == percentile(cmd, Diagnosis.LMCI)


def test_nan_cmd_has_no_percentile() -> None:
    assert percentile(float("nan"), Diagnosis.CN) is None


def test_infinite_cmd_saturates() -> None:
    assert percentile(math.inf, Diagnosis.AD) == 100
    assert percentile(-math.inf, Diagnosis.AD) == 0


class TestRounding:
    def test_ties_round_away_from_zero(self):
        assert round_half_away_from_zero(0.5) == 1
        assert round_half_away_from_zero(2.5) == 3
        assert round_half_away_from_zero(50.5) == 51
        assert round_half_away_from_zero(99.5) == 100
        assert round_half_away_from_zero(-2.5) == -3

    def test_non_ties(self):
        assert round_half_away_from_zero(49.4999) == 49
        assert round_half_away_from_zero(50.0000024) == 50
        assert round_half_away_from_zero(0.0) == 0

    def test_just_below_half_rounds_down(self):
        assert round_half_away_from_zero(0.49999999999999994) == 0
        assert round_half_away_from_zero(-0.49999999999999994) == 0
        assert round_half_away_from_zero(49.49999999999999) == 49


class TestNormalCdf:
    @pytest.mark.parametrize(
        "z, expected",
        [
            (0.0, 0.5),
            (1.0, 0.8413447),
            (-1.0, 0.1586553),
            (1.96, 0.9750021),
            (-2.0, 0.0227501),
        ],
    )
    def test_known_quantiles(self, z, expected):
        assert normal_cdf(z) == pytest.approx(expected, abs=1e-6)

    def test_symmetry(self):
        for z in (0.3, 1.1, 2.7):
            assert normal_cdf(z) + normal_cdf(-z) == pytest.approx(1.0, abs=1e-9)
