from __future__ import annotations

import re
from typing import Optional

# "Section 8", "Article 4.2.1", ...
SECTION_REF = re.compile(r"(?:Section|Article)\s+\d+(?:\.\d+)*", re.I)


def infer_location(text: str, category: str) -> str:
    """
    Best-effort location when the model did not give one.
    Returns the first Section/Article reference inside the excerpt, or a
    readable fallback built from the category. Never empty.
    """
    m = SECTION_REF.search(text or "")
    if m:
        return m.group(0)
    return f"{category} clause (exact section not specified)"


def resolve_location(location: Optional[str], text: str, category: str) -> str:
    """
    Keeps an explicit location unless it is missing or an "Unknown ..." token.
    """
    loc = (location or "").strip()
    if not loc or "unknown" in loc.lower():
        return infer_location(text, category)
    return loc
