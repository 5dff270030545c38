from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

from riskparse.nlp.preprocess import normalize_newlines

logger = logging.getLogger(__name__)

MAX_MITIGATION_POINTS = 10
MIN_POINT_LENGTH = 10  # a point must be longer than this once its bullet is removed

# Where a mitigation section stops: next risk block, bold header, pagination, end of text
_SECTION_END = r"(?=\n\nRisk Category:|\n\n\*\*|\n\nPart \d+|\Z)"

_BULLET_LINE = re.compile(r"^(?:[-•*]|\d+\.)")
_BULLET_PREFIX = re.compile(r"^[-•*]\s*")
_NUMBER_PREFIX = re.compile(r"^\d+\.\s*")
_TRAILING_SPLIT = re.compile(r"Mitigation", re.I)


def _strip_bullet(line: str) -> str:
    line = _BULLET_PREFIX.sub("", line)
    return _NUMBER_PREFIX.sub("", line)


def _is_artifact(point: str) -> bool:
    # unfilled template brackets or leftover markdown bold
    return "[" in point or "**" in point


def collect_bullet_points(block: str, limit: int = MAX_MITIGATION_POINTS) -> List[str]:
    """
    Bullet ("-", "•", "*") and numbered ("1.") lines from block, with the
    prefix removed. Deduplicated by exact text, first-seen order, capped.
    """
    out: List[str] = []
    seen = set()
    for raw in (block or "").split("\n"):
        line = raw.strip()
        if not _BULLET_LINE.match(line):
            continue

        point = _strip_bullet(line).strip()
        if len(point) <= MIN_POINT_LENGTH or _is_artifact(point):
            continue
        if point in seen:
            continue

        seen.add(point)
        out.append(point)
        if len(out) >= limit:
            break
    return out


class MitigationStrategy(Protocol):
    """Anything with a name and a section(text) -> block-or-None method."""

    @property
    def name(self) -> str:
        ...

    def section(self, text: str) -> Optional[str]:
        ...


@dataclass(frozen=True)
class HeadingStrategy:
    """Bullets under an explicit "<heading>:" section."""
    heading: str

    @property
    def name(self) -> str:
        return f"heading:{self.heading}"

    def section(self, text: str) -> Optional[str]:
        pattern = re.compile(re.escape(self.heading) + r":([\s\S]*?)" + _SECTION_END, re.I)
        m = pattern.search(text)
        return m.group(1) if m else None


@dataclass(frozen=True)
class TrailingSectionStrategy:
    """
    Bullets after the last "Mitigation" mention, for lists without a known
    heading. Scans the whole text when the word never appears.
    """
    name: str = "trailing"

    def section(self, text: str) -> Optional[str]:
        return _TRAILING_SPLIT.split(text)[-1]


DEFAULT_STRATEGIES: Sequence[MitigationStrategy] = (
    HeadingStrategy("Mitigation Summary"),
    HeadingStrategy("Mitigation Recommendations"),
    HeadingStrategy("Recommended Mitigations"),
    HeadingStrategy("Mitigation Strategies"),
    TrailingSectionStrategy(),
)


def parse_mitigation_points(text: Optional[str], strategies: Iterable[MitigationStrategy] = DEFAULT_STRATEGIES) -> List[str]:
    """
    Tries each strategy in order and returns the first non-empty point list.
    Returns [] when nothing is found.
    """
    t = normalize_newlines(text)

    for strategy in strategies:
        block = strategy.section(t)
        if block is None:
            continue

        points = collect_bullet_points(block)
        if points:
            logger.debug("Mitigation points found via %s: %d", strategy.name, len(points))
            return points

    return []
