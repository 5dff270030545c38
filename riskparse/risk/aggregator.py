from __future__ import annotations

from typing import Any, Dict, List

from riskparse.risk.extractor import Risk

# Most severe first
SEVERITY_ORDER: List[str] = ["Critical", "High", "Medium", "Low"]

SEVERITY_COLORS: Dict[str, str] = {
    "critical": "#ef4444",  # red
    "high": "#f97316",      # orange
    "medium": "#eab308",    # yellow
    "low": "#22c55e",       # green
}
DEFAULT_COLOR = "#6b7280"   # gray


def _severity_key(score: str) -> str:
    s = (score or "").strip().lower()
    for level in SEVERITY_ORDER:
        if s == level.lower():
            return level
    return "Other"


def _severity_rank(score: str) -> int:
    key = _severity_key(score)
    if key == "Other":
        return len(SEVERITY_ORDER)
    return SEVERITY_ORDER.index(key)


def severity_color(score: str) -> str:
    return SEVERITY_COLORS.get((score or "").strip().lower(), DEFAULT_COLOR)


def sort_by_severity(risks: List[Risk]) -> List[Risk]:
    """Stable: risks of equal severity keep their extraction order."""
    return sorted(risks, key=lambda r: _severity_rank(r.score))


def summarize_risks(risks: List[Risk]) -> Dict[str, Any]:
    """
    Severity counts for a parsed analysis.
    Unrecognised score labels are counted under "Other".
    """
    counts = {level: 0 for level in SEVERITY_ORDER}
    counts["Other"] = 0

    if not risks:
        return {
            "total": 0,
            "overall_severity": "None",
            "counts": counts,
            "top_categories": [],
        }

    for r in risks:
        counts[_severity_key(r.score)] += 1

    overall = next((level for level in SEVERITY_ORDER if counts[level]), "Other")

    # Categories behind the critical/high findings, first-seen order
    top: List[str] = []
    for r in sort_by_severity(risks):
        if _severity_key(r.score) not in ("Critical", "High"):
            break
        if r.category not in top:
            top.append(r.category)

    return {
        "total": len(risks),
        "overall_severity": overall,
        "counts": counts,
        "top_categories": top[:8],  # cap for UI
    }
