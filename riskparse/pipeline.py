from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from riskparse.audit.logger import append_audit_event
from riskparse.export.markdown import format_analysis_as_markdown
from riskparse.mitigation.extractor import parse_mitigation_points
from riskparse.nlp.preprocess import preprocess_analysis_text
from riskparse.risk.aggregator import summarize_risks
from riskparse.risk.extractor import Risk, parse_risks_with_source

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    risks: List[Risk] = field(default_factory=list)
    mitigation_points: List[str] = field(default_factory=list)
    used_fallback: bool = False

    def to_markdown(self, title: Optional[str] = None) -> str:
        return format_analysis_as_markdown(self.risks, self.mitigation_points, title=title)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risks": [r.to_dict() for r in self.risks],
            "mitigation_points": list(self.mitigation_points),
            "used_fallback": self.used_fallback,
        }


def analyze_analysis_text(raw_text: Optional[str], audit: bool = False) -> AnalysisResult:
    """
    Pipeline:
      1) strip echoed prompt scaffolding
      2) extract risk blocks (primary pass, then section fallback)
      3) extract mitigation points
    An empty result is a valid outcome, not an error.
    """
    cleaned = preprocess_analysis_text(raw_text)

    risks, used_fallback = parse_risks_with_source(cleaned)
    points = parse_mitigation_points(cleaned)

    logger.info(
        "Parsed analysis: %d risks (%s pass), %d mitigation points",
        len(risks),
        "fallback" if used_fallback else "primary",
        len(points),
    )

    if audit:
        summary = summarize_risks(risks)
        append_audit_event(
            {
                "event": "analysis_parsed",
                "chars_raw": len(raw_text or ""),
                "chars_cleaned": len(cleaned),
                "risks": summary["total"],
                "severity_counts": summary["counts"],
                "used_fallback": used_fallback,
                "mitigation_points": len(points),
            }
        )

    return AnalysisResult(risks=risks, mitigation_points=points, used_fallback=used_fallback)
