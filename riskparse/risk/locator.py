from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from rapidfuzz import fuzz

from riskparse.risk.extractor import Risk

MIN_EXCERPT_LENGTH = 10   # shorter excerpts are too ambiguous to highlight
PREFIX_LENGTH = 40        # long excerpts are often truncated by the model

_SECTION_NUMBER = re.compile(r"(?:Section|Article)\s+(\d+(?:\.\d+)*)", re.I)


@dataclass
class ExcerptMatch:
    start: int
    end: int
    method: str    # exact | prefix | location | fuzzy
    score: float   # 0-100


def _find_location_heading(contract_text: str, location: str) -> Optional[ExcerptMatch]:
    ref = _SECTION_NUMBER.search(location or "")
    if not ref:
        return None

    heading = re.compile(r"(?:Section|Article)\s+" + re.escape(ref.group(1)) + r"(?![\d.]*\d)", re.I)
    m = heading.search(contract_text)
    if not m:
        return None

    # Highlight the whole heading line
    line_end = contract_text.find("\n", m.start())
    end = len(contract_text) if line_end == -1 else line_end
    return ExcerptMatch(start=m.start(), end=end, method="location", score=100.0)


def locate_risk_excerpt(contract_text: str, risk: Risk, min_score: float = 80) -> Optional[ExcerptMatch]:
    """
    Finds where a risk's excerpt appears in the original contract.

    Tries, in order:
      1) exact substring
      2) the first 40 characters of a long excerpt
      3) the Section/Article heading named by the risk location
      4) fuzzy alignment (rapidfuzz partial_ratio), accepted at >= min_score
    Returns None if nothing is close enough.
    """
    contract = contract_text or ""
    excerpt = (risk.text or "").strip()
    if not contract:
        return None

    if len(excerpt) > MIN_EXCERPT_LENGTH:
        idx = contract.find(excerpt)
        if idx != -1:
            return ExcerptMatch(start=idx, end=idx + len(excerpt), method="exact", score=100.0)

        if len(excerpt) > PREFIX_LENGTH:
            prefix = excerpt[:PREFIX_LENGTH]
            idx = contract.find(prefix)
            if idx != -1:
                end = min(len(contract), idx + len(excerpt))
                return ExcerptMatch(start=idx, end=end, method="prefix", score=100.0)

    heading = _find_location_heading(contract, risk.location)
    if heading is not None:
        return heading

    if len(excerpt) <= MIN_EXCERPT_LENGTH or len(excerpt) > len(contract):
        return None

    # partial_ratio aligns the shorter string (the excerpt) inside the contract
    aligned = fuzz.partial_ratio_alignment(excerpt, contract, score_cutoff=min_score)
    if aligned is None:
        return None

    return ExcerptMatch(
        start=aligned.dest_start,
        end=aligned.dest_end,
        method="fuzzy",
        score=round(aligned.score, 2),
    )
