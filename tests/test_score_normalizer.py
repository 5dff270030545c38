import math

import pytest

from riskparse.scoring.normalizer import (
    NormalizedScore,
    coerce_score,
    fix_decimal_point_issue,
    format_score_display,
    get_score_label,
    normalize_score,
)


@pytest.mark.parametrize(
    "score, expected",
    [
        (None, "N/A"),
        ("abc", "N/A"),
        ("", "N/A"),
        (float("nan"), "N/A"),
        (True, "N/A"),
        ([], "N/A"),
        (0, "0%"),
        ("0", "0%"),
        (11084, "High"),          # 110.84 after correction
        (10000, "100.0%"),        # 100.0 after correction
        (99999, "Very High"),     # 999.99 is not a plausible score
        (1500, "Very High"),      # too few digits to correct
        (float("inf"), "Very High"),
        (1000, "High"),
        (500, "High"),
        (100, "100%"),
        (42, "42%"),
        ("42%", "42%"),
        (42.56, "42.6%"),
        ("87.5", "87.5%"),
        (1, "1%"),
        (0.5, "50.0%"),
        (0.0005, "<0.1%"),
        (-3, "<0.1%"),
    ],
)
def test_format_score_display(score, expected):
    assert format_score_display(score) == expected


@pytest.mark.parametrize(
    "score, expected",
    [
        (None, 0),
        ("abc", 0),
        (float("nan"), 0),
        (11084, 110.84),
        ("11084", 110.84),
        (99999, 999.99),
        (2500000, 250.0),
        (11084.56, 110.84),    # fractional digits are dropped, not shifted
        (10 ** 400, math.inf),
        (-10 ** 400, -math.inf),
        (1500, 1500),
        (500, 500),
        (0.3, 0.3),
        (-7, -7),
    ],
)
def test_fix_decimal_point_issue(score, expected):
    assert fix_decimal_point_issue(score) == pytest.approx(expected)


@pytest.mark.parametrize(
    "score", [None, "abc", 0, 0.2, 1, 55.5, 100, 999, 1000, 1001, 1500, 11084, 11084.56, 99999, 123456789, -50,
              float("inf"), 10 ** 400, -10 ** 400]
)
def test_correction_is_idempotent(score):
    once = fix_decimal_point_issue(score)
    assert fix_decimal_point_issue(once) == once


@pytest.mark.parametrize(
    "score, label",
    [
        (11084, "Very High"),
        (101, "Very High"),
        (85, "High"),
        (61, "Good"),
        (60, "Medium"),
        (41, "Medium"),
        (40, "Low"),
        (21, "Low"),
        (20, "Very Low"),
        (None, "Very Low"),
        ("abc", "Very Low"),
    ],
)
def test_get_score_label(score, label):
    assert get_score_label(score) == label


@pytest.mark.parametrize(
    "score", [None, "", "abc", "  7 ", "1e3", "-Infinity", object(), {}, float("-inf"), 10 ** 30, -0.0, 3 + 0j,
              10 ** 400, -10 ** 400]
)
def test_display_is_total(score):
    out = format_score_display(score)
    assert isinstance(out, str) and out
    assert "nan" not in out.lower()


def test_coerce_score():
    assert coerce_score("  12.5 points") == 12.5
    assert coerce_score("1e3") == 1000.0
    assert coerce_score("Infinity") == math.inf
    assert coerce_score(".5") == 0.5
    assert coerce_score("x12") is None
    assert coerce_score(False) is None


def test_normalize_score_bundle():
    result = normalize_score(11084)
    assert isinstance(result, NormalizedScore)
    assert result.value == pytest.approx(110.84)
    assert result.display == "High"
    assert result.label == "Very High"

    assert normalize_score("abc") == NormalizedScore(value=0.0, display="N/A", label="Very Low")


def test_huge_ints_saturate_to_infinity():
    assert coerce_score(10 ** 400) == math.inf
    assert coerce_score(-10 ** 400) == -math.inf
    assert format_score_display(10 ** 400) == "Very High"
    assert format_score_display(-10 ** 400) == "<0.1%"
    assert get_score_label(10 ** 400) == "Very High"
    assert normalize_score(10 ** 400).value == math.inf
