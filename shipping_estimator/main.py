"""
Streamlit entrypoint for the shipment estimator.
"""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import streamlit as st

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from shipping_estimator.core.packer import MAX_PARCEL_WEIGHT_KG
from shipping_estimator.core.recommender import SERVICE_BRACKETS
from shipping_estimator.core.shipment import ShipmentEstimate, estimate_shipment, lines_from_payload
from shipping_estimator.models.units import UnitOfMeasure
from shipping_estimator.report.pdf_generator import generate_pdf_report
from shipping_estimator.visualization import parcel_plot

BASE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = BASE_DIR / "config"

UNKNOWN_UNIT = "(unknown)"

logger = logging.getLogger(__name__)


@st.cache_data
def load_json_config(filename: str) -> Any:
    with open(CONFIG_DIR / filename, "r", encoding="utf-8") as file:
        return json.load(file)


def _optional(value: float) -> Optional[float]:
    """Form inputs use 0 for "not provided"."""
    return float(value) if value > 0 else None


def build_line_inputs(index: int, product_templates: Dict[str, Any]) -> Dict[str, Any]:
    with st.expander(f"Cart Line {index + 1}", expanded=index == 0):
        template_options = {value["name"]: value for value in product_templates.values()}
        template_names = list(template_options.keys())
        selected_template = st.selectbox(
            "Product Template",
            template_names,
            index=index % len(template_names),
            key=f"template_{index}",
            help="Select a product preset or customise its packaging below",
        )
        template = template_options[selected_template]
        packaging = template.get("packaging", {})
        key_suffix = f"_{index}_{selected_template}"

        name = st.text_input("Item Name", value=template["name"], key=f"name{key_suffix}")

        col1, col2 = st.columns(2)
        quantity = col1.number_input(
            "Quantity (sold units)",
            min_value=1,
            value=1,
            step=1,
            key=f"quantity{key_suffix}",
        )
        unit_price = col2.number_input(
            "Unit Price",
            min_value=0.0,
            value=float(template.get("unit_price", 0.0)),
            step=0.01,
            format="%.2f",
            key=f"price{key_suffix}",
        )

        st.markdown("**Packaging** (leave at 0 when unknown)")
        unit_labels = [UNKNOWN_UNIT] + [unit.value for unit in UnitOfMeasure]
        preset_unit = UnitOfMeasure.parse(packaging.get("unit_of_measure"))
        col3, col4, col5 = st.columns(3)
        pack_quantity = col3.number_input(
            "Pack Quantity",
            min_value=0,
            value=int(packaging.get("pack_quantity") or 0),
            step=1,
            key=f"pack{key_suffix}",
            help="Individual items per sold unit",
        )
        unit_label = col4.selectbox(
            "Unit of Measure",
            unit_labels,
            index=unit_labels.index(preset_unit.value) if preset_unit else 0,
            key=f"unit{key_suffix}",
        )
        unit_size = col5.number_input(
            "Unit Size",
            min_value=0.0,
            value=float(packaging.get("unit_size") or 0.0),
            step=1.0,
            key=f"size{key_suffix}",
            help="Size of one item in the chosen unit (e.g. 330 for a 330ml can)",
        )

        col6, col7 = st.columns(2)
        individual_weight = col6.number_input(
            "Individual Item Weight (kg)",
            min_value=0.0,
            value=float(packaging.get("individual_unit_weight") or 0.0),
            step=0.01,
            format="%.3f",
            key=f"item_weight{key_suffix}",
        )
        total_weight = col7.number_input(
            "Total Package Weight (kg)",
            min_value=0.0,
            value=float(packaging.get("total_package_weight") or 0.0),
            step=0.1,
            format="%.3f",
            key=f"total_weight{key_suffix}",
            help="Overrides every other weight estimate when set",
        )

        preset_dims = packaging.get("package_dimensions") or {}
        dim_cols = st.columns(3)
        dimensions = {
            side: _optional(
                col.number_input(
                    f"{side.title()} (cm)",
                    min_value=0.0,
                    value=float(preset_dims.get(side) or 0.0),
                    step=0.5,
                    key=f"{side}{key_suffix}",
                )
            )
            for side, col in zip(("length", "width", "height"), dim_cols)
        }

    return {
        "name": name,
        "unit_price": f"{unit_price:.2f}",
        "quantity": int(quantity),
        "packaging": {
            "pack_quantity": int(pack_quantity) or None,
            "unit_of_measure": None if unit_label == UNKNOWN_UNIT else unit_label,
            "unit_size": _optional(unit_size),
            "individual_unit_weight": _optional(individual_weight),
            "total_package_weight": _optional(total_weight),
            "package_dimensions": dimensions,
        },
    }


def _render_results(estimate: ShipmentEstimate, pdf_bytes: bytes) -> None:
    recommendation = estimate.recommendation

    st.divider()
    st.markdown("## Shipment Estimate")

    summary_cols = st.columns(4)
    summary_cols[0].metric("Parcels", estimate.parcel_count, help="Number of parcels after consolidation")
    summary_cols[1].metric("Total Weight", f"{estimate.total_weight_kg:.3f} kg")
    summary_cols[2].metric("Declared Value", f"{estimate.declared_value:.2f}")
    summary_cols[3].metric("Weight Bracket", recommendation.bracket.title())

    for error in estimate.line_errors:
        st.warning(f"Cannot estimate shipping for {error.name}: {error.message}")

    col1, col2 = st.columns(2)
    with col1:
        with st.expander("Parcels", expanded=True):
            st.dataframe(
                [
                    {
                        "Parcel": idx,
                        "Weight (kg)": parcel.weight_kg,
                        "L x W x H (cm)": f"{parcel.length_cm} x {parcel.width_cm} x {parcel.height_cm}",
                        "Lines": parcel.line_count,
                        "Value": f"{parcel.declared_value:.2f}",
                    }
                    for idx, parcel in enumerate(estimate.parcels, start=1)
                ],
                use_container_width=True,
                hide_index=True,
            )
    with col2:
        with st.expander("Recommended Services", expanded=True):
            for service in recommendation.eligible_services:
                st.markdown(f"- {service}")
            for warning in recommendation.warnings:
                st.warning(warning)
            for requirement in recommendation.requirements:
                st.info(requirement)

    if estimate.parcels:
        st.divider()
        st.markdown("## Parcel Layout")
        st.plotly_chart(parcel_plot.parcels_figure(estimate.parcels), use_container_width=True)

    st.divider()
    st.markdown("## Report")
    st.download_button(
        label="Download PDF Report",
        data=pdf_bytes,
        file_name="shipment_estimate.pdf",
        mime="application/pdf",
        use_container_width=True,
        help="Download the cart, parcel and service summary as a PDF",
    )


def main() -> None:
    st.set_page_config(page_title="Shipment Estimator", layout="wide")
    st.title("Shipment Estimation")

    with st.sidebar:
        st.markdown("**Service Brackets**")
        for bracket in SERVICE_BRACKETS:
            limit = "and above" if bracket.max_weight_kg == float("inf") else f"up to {bracket.max_weight_kg:g} kg"
            st.caption(f"{bracket.name.title()} ({limit}): {', '.join(bracket.services)}")

    st.divider()

    product_templates = load_json_config("products.json")
    line_count = st.number_input("Cart Lines", min_value=1, max_value=20, value=2, step=1)

    with st.form("cart_form"):
        raw_lines = [build_line_inputs(idx, product_templates) for idx in range(int(line_count))]
        st.divider()

        st.markdown("**Packing Settings**")
        max_parcel_weight = st.slider(
            "Max Parcel Weight (kg)",
            min_value=1.0,
            max_value=70.0,
            value=MAX_PARCEL_WEIGHT_KG,
            step=0.5,
            help="A new parcel is started when the next line would exceed this weight",
        )

        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            submitted = st.form_submit_button("Estimate Shipment", type="primary", use_container_width=True)

    if submitted:
        try:
            st.session_state.pop("results", None)
            lines, errors = lines_from_payload(raw_lines)
            estimate = estimate_shipment(
                lines, max_parcel_weight=float(max_parcel_weight), line_errors=errors
            )

            with tempfile.TemporaryDirectory() as tmpdir:
                tmpdir_path = Path(tmpdir)
                layout_images = []
                if estimate.parcels:
                    layout_image = tmpdir_path / "parcel_layout.png"
                    parcel_plot.save_figure_image(parcel_plot.parcels_figure(estimate.parcels), layout_image)
                    layout_images.append(layout_image)
                pdf_path = generate_pdf_report(
                    tmpdir_path / "shipment_estimate.pdf",
                    lines=lines,
                    estimate=estimate,
                    layout_images=layout_images,
                )
                pdf_bytes = pdf_path.read_bytes()

            st.session_state["results"] = {"estimate": estimate, "pdf_bytes": pdf_bytes}
            st.success("Estimate completed.")
        except Exception as exc:  # noqa: BLE001
            logger.exception("Shipment estimate failed")
            st.error(f"Estimate failed: {exc}")

    results = st.session_state.get("results")
    if results:
        _render_results(results["estimate"], results["pdf_bytes"])


if __name__ == "__main__":
    main()
