from __future__ import annotations

import os
from datetime import datetime
from typing import List

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from riskparse import config
from riskparse.audit.logger import append_audit_event
from riskparse.risk.aggregator import severity_color, summarize_risks
from riskparse.risk.extractor import Risk

DEFAULT_DISCLAIMER = (
    "This report is generated automatically for informational purposes only and does not constitute legal advice. "
    "For decisions that may have legal or financial impact, consult a qualified legal professional."
)


def _wrap_text(c: canvas.Canvas, text: str, x: float, y: float, max_chars: int = 110, line_height: int = 13):
    """
    Simple word wrap by max character count.
    """
    words = (text or "").split()
    line = ""
    for w in words:
        test = f"{line} {w}".strip()
        if len(test) <= max_chars:
            line = test
        else:
            c.drawString(x, y, line)
            y -= line_height
            line = w
    if line:
        c.drawString(x, y, line)
        y -= line_height
    return y


def _ensure_room(c: canvas.Canvas, y: float, height: float, needed: float = 3 * cm, font=("Helvetica", 10)) -> float:
    if y < needed:
        c.showPage()
        c.setFont(*font)
        return height - 2 * cm
    return y


def generate_pdf_report(
    filename_base: str,
    risks: List[Risk],
    mitigation_points: List[str],
    disclaimer: str = DEFAULT_DISCLAIMER,
) -> str:
    """
    Writes a PDF to EXPORT_DIR and returns the absolute file path.
    """
    os.makedirs(config.EXPORT_DIR, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_path = os.path.join(config.EXPORT_DIR, f"{filename_base}_risk_report_{ts}.pdf")

    c = canvas.Canvas(out_path, pagesize=A4)
    width, height = A4

    x = 2 * cm
    y = height - 2 * cm

    # Title
    c.setFont("Helvetica-Bold", 16)
    c.drawString(x, y, config.REPORT_TITLE)
    y -= 22

    # Severity summary
    summary = summarize_risks(risks)
    counts = summary["counts"]

    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, "Summary")
    y -= 18

    c.setFont("Helvetica", 11)
    y = _wrap_text(c, f"Risks identified: {summary['total']} | Highest severity: {summary['overall_severity']}", x, y)
    y = _wrap_text(
        c,
        f"Critical={counts['Critical']}, High={counts['High']}, Medium={counts['Medium']}, "
        f"Low={counts['Low']}, Other={counts['Other']}",
        x,
        y,
    )

    y -= 8

    # One block per risk
    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, "Identified Risks")
    y -= 18

    for i, risk in enumerate(risks, start=1):
        y = _ensure_room(c, y, height, font=("Helvetica-Bold", 11))
        c.setFont("Helvetica-Bold", 11)
        c.setFillColor(HexColor(severity_color(risk.score)))
        y = _wrap_text(c, f"{i}. {risk.category} ({risk.score})", x, y, max_chars=100, line_height=14)
        c.setFillColor(HexColor("#000000"))

        c.setFont("Helvetica", 10)
        y = _wrap_text(c, f"Location: {risk.location}", x, y, max_chars=120, line_height=12)
        if risk.text:
            y = _wrap_text(c, f'Text: "{risk.text}"', x, y, max_chars=120, line_height=12)
        y = _ensure_room(c, y, height)
        y = _wrap_text(c, f"Why: {risk.reason}", x, y, max_chars=120, line_height=12)
        y -= 6

    # Mitigation list
    y = _ensure_room(c, y, height, needed=4 * cm, font=("Helvetica-Bold", 12))
    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, "Mitigation Summary")
    y -= 18

    c.setFont("Helvetica", 10)
    if not mitigation_points:
        y = _wrap_text(c, "No mitigation points were extracted.", x, y, max_chars=120, line_height=12)
    for point in mitigation_points:
        y = _ensure_room(c, y, height)
        y = _wrap_text(c, f"- {point}", x, y, max_chars=120, line_height=12)

    y -= 8

    # Disclaimer
    if y < 4 * cm:
        c.showPage()
        y = height - 2 * cm

    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, y, "Disclaimer")
    y -= 18

    c.setFont("Helvetica", 9)
    y = _wrap_text(c, disclaimer, x, y, max_chars=130, line_height=11)

    c.save()

    out_path = os.path.abspath(out_path)
    append_audit_event(
        {
            "event": "export_pdf_report",
            "output_path": out_path,
            "risks": summary["total"],
            "overall_severity": summary["overall_severity"],
            "mitigation_points": len(mitigation_points),
        }
    )
    return out_path
