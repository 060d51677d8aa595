"""PDF rendering of the impact assessment register."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from esms.utils.timefmt import today_iso

from .schemas import ImpactAssessmentRead
from .significance import Significance

_SIGNIFICANCE_COLOURS = {
    Significance.LOW_SIGNIFICANCE: colors.HexColor("#d9ead3"),
    Significance.SIGNIFICANT: colors.HexColor("#fff2cc"),
    Significance.VERY_SIGNIFICANT: colors.HexColor("#f4cccc"),
}


def build_pdf(
    *,
    assessments: Sequence[ImpactAssessmentRead],
    title: str = "Registo de Avaliação de Impactos",
) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        title=title,
        leftMargin=24,
        rightMargin=24,
        topMargin=36,
        bottomMargin=24,
    )
    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"]
    cell_style.fontSize = 7
    cell_style.leading = 9

    elements = [
        Paragraph(title, styles["Heading2"]),
        Paragraph(f"Gerado em {today_iso()} ({len(assessments)} registos)", styles["BodyText"]),
        Spacer(1, 12),
    ]

    header = [
        "#",
        "Actividade",
        "Risco / Impacto",
        "Factor Ambiental",
        "Intensidade",
        "Probabilidade",
        "Significância",
        "Medidas",
        "Prazo",
        "Responsável",
    ]
    table_data = [header]
    row_styles = []
    for idx, item in enumerate(assessments, start=1):
        table_data.append(
            [
                str(idx),
                Paragraph(item.activity, cell_style),
                Paragraph(item.risks_and_impact.description, cell_style),
                Paragraph(item.environmental_factor.description, cell_style),
                item.intensity.value,
                item.probability.value,
                item.significance_label or "-",
                Paragraph(item.description_of_measures, cell_style),
                item.deadline,
                item.responsible or "",
            ]
        )
        colour = _SIGNIFICANCE_COLOURS.get(item.significance)
        if colour is not None:
            row_styles.append(("BACKGROUND", (6, idx), (6, idx), colour))

    table = Table(table_data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("ALIGN", (0, 0), (0, -1), "CENTER"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
            + row_styles
        )
    )
    elements.append(table)

    doc.build(elements)
    return buffer.getvalue()
