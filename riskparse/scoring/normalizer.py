from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

# Some upstream relevance scores arrive with the decimal point dropped
# (11084 meaning 110.84). These thresholds are empirical; keep them as-is.
DECIMAL_SHIFT_THRESHOLD = 1000      # above this a score is suspect
MIN_SHIFT_DIGITS = 5                # integer part must have at least this many digits
SHIFT_KEEP_DIGITS = 3               # digits kept before the re-inserted decimal point
PLAUSIBLE_DISPLAY_CEILING = 200     # corrected value shown only if below this
PLAUSIBLE_VALUE_CEILING = 1000      # corrected value returned only if below this
TINY_SCORE = 0.001

NOT_AVAILABLE = "N/A"

# Leading number, the way a lenient float parse reads "42%", " 3.5 pts", "1e3"
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INFINITY = re.compile(r"^\s*([+-]?)Infinity")


@dataclass(frozen=True)
class NormalizedScore:
    value: float
    display: str
    label: str


def coerce_score(score: Any) -> Optional[float]:
    """
    Returns the numeric value of score, or None if it is not a usable number.
    Booleans are rejected even though they are ints.
    """
    if score is None or isinstance(score, bool):
        return None

    if isinstance(score, int):
        try:
            value = float(score)
        except OverflowError:
            value = math.inf if score > 0 else -math.inf
    elif isinstance(score, float):
        value = float(score)
    elif isinstance(score, str):
        m = _LEADING_NUMBER.match(score)
        if m:
            value = float(m.group(1))
        else:
            inf = _LEADING_INFINITY.match(score)
            if not inf:
                return None
            value = -math.inf if inf.group(1) == "-" else math.inf
    else:
        return None

    if math.isnan(value):
        return None
    return value


def _decimal_shift(value: float) -> Optional[float]:
    """
    11084 -> 110.84: re-inserts the decimal point after the first
    SHIFT_KEEP_DIGITS digits of the integer part. Any fractional part is
    dropped (11084.56 -> 110.84). None if the value is not a candidate.
    """
    if not math.isfinite(value) or value <= DECIMAL_SHIFT_THRESHOLD:
        return None

    digits = str(int(value))
    if len(digits) < MIN_SHIFT_DIGITS:
        return None

    return float(digits[:SHIFT_KEEP_DIGITS] + "." + digits[SHIFT_KEEP_DIGITS:])


def _percent(value: float) -> str:
    s = f"{value:.1f}"
    if s.endswith(".0"):
        return s[:-2] + "%"
    return s + "%"


def format_score_display(score: Any) -> str:
    """
    Human readable score:
      - invalid input                  -> "N/A"
      - > 1000, plausible decimal slip -> "High" or "110.8%"-style percent
      - > 1000 otherwise               -> "Very High"
      - 100 < x <= 1000                -> "High"
      - 1 <= x <= 100                  -> "42%" / "42.5%"
      - 0                              -> "0%"
      - below 0.001                    -> "<0.1%"
      - fractions                      -> x * 100 as percent, one decimal
    """
    value = coerce_score(score)
    if value is None:
        return NOT_AVAILABLE

    if value > DECIMAL_SHIFT_THRESHOLD:
        corrected = _decimal_shift(value)
        if corrected is not None and 0 < corrected < PLAUSIBLE_DISPLAY_CEILING:
            if corrected > 100:
                return "High"
            return f"{corrected:.1f}%"
        return "Very High"

    if value > 100:
        return "High"

    if 1 <= value <= 100:
        return _percent(value)

    if value == 0:
        return "0%"

    if value < TINY_SCORE:
        return "<0.1%"

    return f"{value * 100:.1f}%"


def fix_decimal_point_issue(score: Any) -> float:
    """
    Corrected numeric value. Invalid input gives 0; values that are not
    plausible decimal slips are returned unchanged. Idempotent.
    """
    value = coerce_score(score)
    if value is None:
        return 0.0

    corrected = _decimal_shift(value)
    if corrected is not None and 0 < corrected < PLAUSIBLE_VALUE_CEILING:
        return corrected
    return value


def label_for_value(value: float) -> str:
    if value > 100:
        return "Very High"
    if value > 80:
        return "High"
    if value > 60:
        return "Good"
    if value > 40:
        return "Medium"
    if value > 20:
        return "Low"
    return "Very Low"


def get_score_label(score: Any) -> str:
    return label_for_value(fix_decimal_point_issue(score))


def normalize_score(score: Any) -> NormalizedScore:
    value = fix_decimal_point_issue(score)
    return NormalizedScore(
        value=value,
        display=format_score_display(score),
        label=label_for_value(value),
    )
