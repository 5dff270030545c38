from __future__ import annotations

from typing import Dict

# Template markers from the analysis prompt, keyed by the field they stand in for
PLACEHOLDER_MARKERS: Dict[str, str] = {
    "category": "[Category]",
    "score": "[Score]",
    "text": "[Exact text]",
    "reason": "[Explanation]",
}


def is_placeholder_risk(category: str, score: str, text: str, reason: str) -> bool:
    """
    True if the model echoed the prompt template instead of filling a field.
    """
    values = {"category": category, "score": score, "text": text, "reason": reason}
    return any(marker in (values[field] or "") for field, marker in PLACEHOLDER_MARKERS.items())
