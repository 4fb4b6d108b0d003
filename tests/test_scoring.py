"""Tests for pace, rounding and score tables."""
import math

import pytest

from speakcheck.services.scoring import (
    calc_wpm,
    round_half_up,
    score_clarity,
    score_confidence,
)


def test_calc_wpm_basic():
    assert calc_wpm(150, 60) == 150
    assert calc_wpm(10, 10) == 60


@pytest.mark.parametrize("seconds", [0, -5, None, math.nan, math.inf])
def test_calc_wpm_without_usable_duration(seconds):
    assert calc_wpm(10, seconds) == 0


def test_calc_wpm_zero_words():
    assert calc_wpm(0, 30) == 0


def test_calc_wpm_rounds_half_up():
    # 3 words in 8 s is exactly 22.5 wpm; built-in round() would give 22
    assert calc_wpm(3, 8) == 23
    assert calc_wpm(1, 16) == 4
    assert calc_wpm(7, 60.5) == 7


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(36.36363636, 1) == 36.4
    assert round_half_up(0.0, 1) == 0.0


def test_round_half_up_large_values():
    assert round_half_up(1e300) == 1e300
    assert round_half_up(1.2e29, 1) == 1.2e29
    assert math.isinf(round_half_up(math.inf))


def test_calc_wpm_tiny_duration():
    # 2 words in 1e-27 s is about 1.2e29 wpm
    assert calc_wpm(2, 1e-27) == int(2 / 1e-27 * 60)
    # overflows to inf
    assert calc_wpm(1, 5e-324) == 0


@pytest.mark.parametrize("ratio, expected", [
    (0.0, 90),
    (0.02, 90),
    (0.03, 80),
    (0.05, 80),
    (0.07, 70),
    (0.10, 70),
    (0.1001, 60),
    (0.5, 60),
    (-1.0, 90),
])
def test_score_clarity(ratio, expected):
    assert score_clarity(ratio) == expected


@pytest.mark.parametrize("wpm, expected", [
    (150, 80),
    (120, 80),
    (170, 80),
    (100, 70),
    (90, 70),
    (119, 70),
    (171, 65),
    (190, 65),
    (200, 65),
    (201, 50),
    (89, 50),
    (30, 50),
    (0, 50),
    (-10, 50),
])
def test_score_confidence(wpm, expected):
    assert score_confidence(wpm) == expected
