from __future__ import annotations

from typing import Iterable, List, Optional

from riskparse import config
from riskparse.risk.extractor import Risk


def format_analysis_as_markdown(
    risks: Iterable[Risk],
    mitigation_points: Iterable[str],
    title: Optional[str] = None,
) -> str:
    """
    Markdown export of an analysis: one H2 block per risk, then the
    mitigation list under its own H2.
    """
    lines: List[str] = [f"# {title or config.REPORT_TITLE}", ""]

    for i, risk in enumerate(risks, start=1):
        lines.append(f"## Risk {i}: {risk.category} ({risk.score})")
        lines.append("")
        lines.append(f"**Contract Location:** {risk.location}")
        lines.append("")
        lines.append("**Problematic Text:**")
        lines.append(f'> "{risk.text}"')
        lines.append("")
        lines.append("**Risk Assessment:**")
        lines.append(risk.reason)
        lines.append("")
        lines.append("---")
        lines.append("")

    lines.append("## Mitigation Summary")
    lines.append("")
    for point in mitigation_points:
        lines.append(f"- {point}")

    return "\n".join(lines) + "\n"
