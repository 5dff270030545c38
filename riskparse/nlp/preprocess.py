from __future__ import annotations

import re
from typing import List, Optional

# Pagination markers the streaming endpoint inserts between chunks
_PART_MARKER = re.compile(r"Part \d+ of \d+")

# "As a senior contract analyst, ..." style role preface, first occurrence only
_ROLE_PREFACE = re.compile(r"^(As a|I am a|Acting as a).*?analyst.*?\n", re.I | re.M)

# Prompt scaffolding the model sometimes echoes back verbatim
_SCAFFOLDING_PATTERNS: List[re.Pattern] = [
    re.compile(r"\*\*CONSTRUCTION CONTRACT RISK ANALYSIS\*\*"),
    re.compile(r"\*\*ROLE AND OBJECTIVE\*\*[\s\S]*?\*\*ANALYSIS FRAMEWORK\*\*"),
    re.compile(r"\*\*ANALYTICAL APPROACH\*\*[\s\S]*?\*\*IMPORTANT NOTES\*\*"),
    re.compile(r"\*\*OUTPUT FORMAT\*\*[\s\S]*?ensure proper parsing"),
    re.compile(r"\*\*PRIORITY RISK AREAS\*\*[\s\S]*?\*\*MITIGATION SUMMARY\*\*"),
]


def normalize_newlines(text: Optional[str]) -> str:
    """
    Converts CRLF / CR line endings to LF.
    The field patterns anchor on "\\n", so mixed endings would hide headers.
    """
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def preprocess_analysis_text(text: Optional[str]) -> str:
    """
    Strips boilerplate the model echoes back before extraction runs:
      1) "Part N of M" pagination markers
      2) the first role preface line ("As a ... analyst ...")
      3) the report banner and echoed prompt sections

    Everything else is left untouched; headers and bullets must survive
    for the extractors.
    """
    cleaned = normalize_newlines(text)
    cleaned = _PART_MARKER.sub("", cleaned)
    cleaned = _ROLE_PREFACE.sub("", cleaned, count=1)

    for pat in _SCAFFOLDING_PATTERNS:
        cleaned = pat.sub("", cleaned)

    return cleaned

