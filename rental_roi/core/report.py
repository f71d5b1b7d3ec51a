from __future__ import annotations

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .model import NPVResult, ROIResult, breakeven_year
from .tables import npv_table, roi_summary
from .utils import fmt_currency, fmt_percent


def to_csv(result: NPVResult) -> bytes:
    return result.to_frame().to_csv(index=False).encode("utf-8")


def build_pdf(roi: ROIResult, npv_result: NPVResult) -> bytes:
    """One-page report: ROI metrics, NPV summary and the cash-flow table."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4)
    styles = getSampleStyleSheet()
    story = []
    story.append(Paragraph("Rental investment report", styles["Title"]))
    story.append(Spacer(1, 12))

    for _, metric in roi_summary(roi).iterrows():
        story.append(Paragraph(f"{metric['Metric']}: {metric['Value']}", styles["Normal"]))
    story.append(Spacer(1, 12))

    story.append(Paragraph(f"Discount rate: {fmt_percent(npv_result.discount_rate_percent)}", styles["Normal"]))
    story.append(Paragraph(f"Horizon: {npv_result.horizon_years} years", styles["Normal"]))
    story.append(Paragraph(f"NPV: {fmt_currency(npv_result.net_present_value)}", styles["Normal"]))
    year = breakeven_year(npv_result)
    story.append(Paragraph(f"Breakeven year: {year if year is not None else '-'}", styles["Normal"]))
    story.append(Spacer(1, 12))

    df = npv_table(npv_result)
    table = Table([list(df.columns)] + df.astype(str).values.tolist(), repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]
    if year is not None:
        style.append(("BACKGROUND", (0, year + 1), (-1, year + 1), colors.lightyellow))
    table.setStyle(TableStyle(style))
    story.append(table)

    doc.build(story)
    return buffer.getvalue()
