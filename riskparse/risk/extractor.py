from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from riskparse.nlp.preprocess import normalize_newlines
from riskparse.risk.location import resolve_location
from riskparse.risk.placeholders import is_placeholder_risk

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown Category"
UNKNOWN_SCORE = "Unknown Score"
UNKNOWN_REASON = "Unknown Reason"


@dataclass(frozen=True)
class Risk:
    category: str
    score: str     # severity label as written by the model: Critical | High | Medium | Low | ...
    text: str      # quoted contract excerpt, "" if none was given
    reason: str
    location: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class RiskFields:
    """
    Raw per-risk captures. None means the field was not found.
    Display sentinels are only applied in to_risk().
    """
    category: Optional[str] = None
    score: Optional[str] = None
    text: Optional[str] = None
    reason: Optional[str] = None
    location: Optional[str] = None

    def to_risk(self) -> Risk:
        category = self.category or UNKNOWN_CATEGORY
        text = self.text or ""
        return Risk(
            category=category,
            score=self.score or UNKNOWN_SCORE,
            text=text,
            reason=self.reason or UNKNOWN_REASON,
            location=resolve_location(self.location, text, category),
        )


def _clean(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def _accept(fields: RiskFields) -> Optional[Risk]:
    risk = fields.to_risk()
    if is_placeholder_risk(risk.category, risk.score, risk.text, risk.reason):
        return None
    return risk


# ---------------------------------------------------------------------------
# Primary pass: one pattern for the whole five-field block
# ---------------------------------------------------------------------------

# Where an explanation ends. Order matters: the model is inconsistent about
# which fields it writes, so any of these may close a block.
_REASON_END = (
    r"(?=\nContract Location:"
    r"|\n\nRisk Category:"
    r"|\n\nMitigation Summary:"
    r"|\n\n\*\*"
    r"|\n\n\Z"
    r"|\n\nPart \d+"
    r"|\Z)"
)

RISK_BLOCK_PATTERN = re.compile(
    r"Risk Category:\s*([^\n]*)\s*\n"
    r"Risk Score:\s*([^\n]*)\s*\n"
    r"Risky Contract Text:\s*(?:\"([^\"]*)\"|([\s\S]*?)(?=\nWhy This Is a Risk:))\s*\n"
    r"Why This Is a Risk:\s*([\s\S]*?)" + _REASON_END +
    r"(?:\s*Contract Location:[ \t]*([^\n]*))?",
    re.I,
)


def extract_primary(text: str) -> List[Risk]:
    """
    Single forward scan for complete risk blocks:
      Risk Category -> Risk Score -> Risky Contract Text -> Why This Is a Risk
      -> [Contract Location]
    finditer keeps its position per call, so concurrent callers never share
    scan state.
    """
    risks: List[Risk] = []
    for m in RISK_BLOCK_PATTERN.finditer(normalize_newlines(text)):
        fields = RiskFields(
            category=_clean(m.group(1)),
            score=_clean(m.group(2)),
            text=_clean(m.group(3)) or _clean(m.group(4)),
            reason=_clean(m.group(5)),
            location=_clean(m.group(6)),
        )
        risk = _accept(fields)
        if risk is not None:
            risks.append(risk)
    return risks


# ---------------------------------------------------------------------------
# Fallback pass: split into sections, then one small pattern per field
# ---------------------------------------------------------------------------

SECTION_SPLIT = re.compile(r"\n\s*(?:Risk \d+:|Risk Category:)", re.I)

# Any header that closes a single-field value
_NEXT_HEADER = (
    r"Risk Category:|Risk \d+:|Risk Score:|Risky Contract Text:|Contract Text:"
    r"|Why This Is a Risk:|Contract Location:|Location:|Mitigation Summary:"
)
_VALUE_BODY = r"([^\n]*?)[ \t]*(?=(?:" + _NEXT_HEADER + r")|\n|\Z)"
_VALUE = r"[ \t]*" + _VALUE_BODY

FIELD_PATTERNS: Dict[str, re.Pattern] = {
    "category": re.compile(r"Risk Category:" + _VALUE, re.I),
    "score": re.compile(r"Risk Score:" + _VALUE, re.I),
    "reason": re.compile(r"Why This Is a Risk:" + _VALUE, re.I),
    "location": re.compile(r"(?:Contract Location:|Location:)" + _VALUE, re.I),
}

# Excerpt may be quoted across lines, or an unquoted single line
EXCERPT_PATTERN = re.compile(
    r"(?:Risky Contract Text:|Contract Text:)\s*(?:\"([^\"]*)\"|" + _VALUE_BODY + r")",
    re.I,
)


def _search_field(name: str, section: str) -> Optional[str]:
    m = FIELD_PATTERNS[name].search(section)
    return _clean(m.group(1)) if m else None


def _parse_section(section: str) -> Optional[Risk]:
    excerpt = EXCERPT_PATTERN.search(section)
    fields = RiskFields(
        category=_search_field("category", section),
        score=_search_field("score", section),
        text=(_clean(excerpt.group(1)) or _clean(excerpt.group(2))) if excerpt else None,
        reason=_search_field("reason", section),
        location=_search_field("location", section),
    )

    # Separators alone must not manufacture risks
    if fields.category is None or fields.score is None:
        return None

    return _accept(fields)


def split_risk_sections(text: str) -> List[str]:
    """
    Splits on "Risk N:" / "Risk Category:" boundaries and re-prefixes every
    section with "Risk Category:". Text before the first boundary is dropped.
    """
    parts = SECTION_SPLIT.split("\n" + normalize_newlines(text))
    return ["Risk Category:" + p.strip() for p in parts[1:]]


def extract_fallback(text: str) -> List[Risk]:
    """
    Looser per-section parsing for output the block pattern cannot match
    (missing, reordered or inline fields).
    """
    risks: List[Risk] = []
    for idx, section in enumerate(split_risk_sections(text), start=1):
        try:
            risk = _parse_section(section)
        except Exception:
            logger.exception("Skipping risk section %d: parse error", idx)
            continue
        if risk is not None:
            risks.append(risk)
    return risks


def parse_risks_with_source(text: Optional[str]) -> Tuple[List[Risk], bool]:
    """
    Returns (risks, used_fallback).
    The fallback parser only runs when the primary pass found nothing.
    """
    raw = text or ""
    risks = extract_primary(raw)
    if risks:
        logger.debug("Primary pass found %d risks", len(risks))
        return risks, False

    risks = extract_fallback(raw)
    logger.debug("Primary pass found no risks; fallback pass found %d", len(risks))
    return risks, True


def parse_risks(text: Optional[str]) -> List[Risk]:
    risks, _ = parse_risks_with_source(text)
    return risks
