"""
Tests for the PDF report and the parcel layout figure.
"""
from decimal import Decimal

import pytest

from shipping_estimator.core.shipment import estimate_shipment, lines_from_payload
from shipping_estimator.models.parcel import Parcel
from shipping_estimator.report.pdf_generator import generate_pdf_report
from shipping_estimator.visualization.parcel_plot import PARCEL_GAP_CM, parcel_offsets, parcels_figure


@pytest.fixture
def parcels():
    return [
        Parcel(weight_kg=16.8, length_cm=28, width_cm=42, height_cm=10, declared_value=Decimal("19.98")),
        Parcel(weight_kg=2.5, length_cm=30, width_cm=20, height_cm=15, declared_value=Decimal("5.00")),
    ]


class TestParcelFigure:
    def test_offsets_lay_parcels_in_a_row(self, parcels):
        assert parcel_offsets(parcels) == [0, 28 + PARCEL_GAP_CM]

    def test_six_faces_and_edges_per_parcel(self, parcels):
        fig = parcels_figure(parcels)

        assert len(fig.data) == len(parcels) * 7
        assert fig.layout.title.text == "Parcels"

    def test_empty_figure(self):
        assert len(parcels_figure([]).data) == 0


class TestPdfReport:
    def test_report_is_written(self, tmp_path, storefront_cart):
        lines, _ = lines_from_payload(storefront_cart)
        estimate = estimate_shipment(storefront_cart)

        output = generate_pdf_report(tmp_path / "reports" / "estimate.pdf", lines=lines, estimate=estimate)

        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")

    def test_missing_images_are_skipped(self, tmp_path, make_line):
        lines = [make_line(3, name="Tools & Parts <boxed>")]
        estimate = estimate_shipment(lines)

        output = generate_pdf_report(
            tmp_path / "estimate.pdf",
            lines=lines,
            estimate=estimate,
            layout_images=[tmp_path / "missing.png"],
        )

        assert output.stat().st_size > 0
