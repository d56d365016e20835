"""
PDF shipment report generator using ReportLab.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from shipping_estimator.core.estimator import estimate_item
from shipping_estimator.core.shipment import ShipmentEstimate
from shipping_estimator.models.cart import CartLine


def _build_table(data: Sequence[Sequence[str]], column_widths: Sequence[float]) -> Table:
    table = Table(data, colWidths=column_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F1F1F1")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#333333")),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
            ]
        )
    )
    return table


def _cart_table(lines: Sequence[CartLine]) -> Table:
    headers = ["Item", "Packaging", "Qty", "Unit Price", "Est. Weight (kg)", "Est. Size (cm)"]
    data = [headers]
    for line in lines:
        estimate = estimate_item(line.packaging, line.quantity)
        dims = estimate.dimensions
        data.append(
            [
                line.name,
                line.packaging.describe(),
                str(line.quantity),
                f"{line.unit_price:.2f}",
                f"{estimate.weight_kg:.3f}",
                f"{dims.length:g} x {dims.width:g} x {dims.height:g}",
            ]
        )
    return _build_table(data, column_widths=[55 * mm, 50 * mm, 15 * mm, 25 * mm, 35 * mm, 50 * mm])


def _parcel_table(estimate: ShipmentEstimate) -> Table:
    headers = ["Parcel", "Weight (kg)", "Dimensions (cm)", "Lines", "Declared Value"]
    data = [headers]
    for idx, parcel in enumerate(estimate.parcels, start=1):
        data.append(
            [
                str(idx),
                f"{parcel.weight_kg:.3f}",
                f"{parcel.length_cm} x {parcel.width_cm} x {parcel.height_cm}",
                str(parcel.line_count),
                f"{parcel.declared_value:.2f}",
            ]
        )
    data.append(["Total", f"{estimate.total_weight_kg:.3f}", "", "", f"{estimate.declared_value:.2f}"])
    return _build_table(data, column_widths=[25 * mm, 35 * mm, 60 * mm, 25 * mm, 45 * mm])


def _recommendation_table(estimate: ShipmentEstimate) -> Table:
    recommendation = estimate.recommendation
    rows = [
        ("Weight Bracket", recommendation.bracket),
        ("Eligible Services", ", ".join(recommendation.eligible_services)),
        ("Warnings", "; ".join(recommendation.warnings) or "None"),
        ("Requirements", "; ".join(recommendation.requirements) or "None"),
    ]
    data = [["Parameter", "Value"]] + [[left, right] for left, right in rows]
    return _build_table(data, column_widths=[60 * mm, 170 * mm])


def generate_pdf_report(
    output_path: str | Path,
    lines: Sequence[CartLine],
    estimate: ShipmentEstimate,
    layout_images: Iterable[str | Path] = (),
) -> Path:
    """
    Generate a shipment estimate PDF report and return the output path.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title="Shipment Estimate Report",
    )

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    subtitle_style = ParagraphStyle(
        "Subtitle",
        parent=styles["Heading2"],
        textColor=colors.HexColor("#2D5B88"),
    )

    story: list = [
        Paragraph("Shipment Estimate Report", title_style),
        Spacer(1, 8 * mm),
        Paragraph("Cart Summary", subtitle_style),
        Spacer(1, 4 * mm),
        _cart_table(lines),
        Spacer(1, 6 * mm),
        Paragraph("Parcels", subtitle_style),
        Spacer(1, 4 * mm),
        _parcel_table(estimate),
        Spacer(1, 6 * mm),
        Paragraph("Service Recommendation", subtitle_style),
        Spacer(1, 4 * mm),
        _recommendation_table(estimate),
    ]

    if estimate.line_errors:
        story.extend([Spacer(1, 6 * mm), Paragraph("Lines Not Estimated", subtitle_style)])
        for error in estimate.line_errors:
            story.append(Paragraph(escape(f"{error.name}: {error.message}"), styles["Normal"]))

    for image_path in layout_images:
        image_path = Path(image_path)
        if image_path.exists():
            story.extend(
                [
                    Spacer(1, 6 * mm),
                    Paragraph(image_path.stem.replace("_", " ").title(), subtitle_style),
                    Spacer(1, 4 * mm),
                    Image(str(image_path), width=180 * mm, height=110 * mm),
                ]
            )

    doc.build(story)
    return output_path
