"""
Simple CLI script to run the shipment estimate pipeline end-to-end on a cart file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from shipping_estimator.core.shipment import estimate_shipment, lines_from_payload
from shipping_estimator.report.pdf_generator import generate_pdf_report
from shipping_estimator.visualization import parcel_plot

BASE_DIR = Path(__file__).resolve().parent


def load_cart(path: Path) -> list:
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "cart",
        nargs="?",
        type=Path,
        default=BASE_DIR / "config" / "cart_example.json",
        help="JSON list of cart items",
    )
    parser.add_argument("--output-dir", type=Path, default=BASE_DIR / "artifacts")
    parser.add_argument("--max-parcel-weight", type=float, default=30.0)
    parser.add_argument("--no-images", action="store_true", help="Skip the Kaleido layout render")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    items = load_cart(args.cart)
    lines, errors = lines_from_payload(items)
    estimate = estimate_shipment(lines, max_parcel_weight=args.max_parcel_weight, line_errors=errors)

    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    layout_images = []
    if estimate.parcels and not args.no_images:
        layout_image = output_dir / "parcel_layout.png"
        parcel_plot.save_figure_image(parcel_plot.parcels_figure(estimate.parcels), layout_image)
        layout_images.append(layout_image)

    pdf_path = generate_pdf_report(
        output_dir / "shipment_estimate.pdf",
        lines=lines,
        estimate=estimate,
        layout_images=layout_images,
    )

    recommendation = estimate.recommendation
    print("=== Shipment Estimate Summary ===")
    for idx, parcel in enumerate(estimate.parcels, start=1):
        print(
            f"Parcel {idx}: {parcel.weight_kg:.3f} kg, "
            f"{parcel.length_cm} x {parcel.width_cm} x {parcel.height_cm} cm, "
            f"value {parcel.declared_value:.2f}"
        )
    print(f"Total Weight: {estimate.total_weight_kg:.3f} kg")
    print(f"Declared Value: {estimate.declared_value:.2f}")
    print(f"Eligible Services: {', '.join(recommendation.eligible_services)}")
    for warning in recommendation.warnings:
        print(f"Warning: {warning}")
    for requirement in recommendation.requirements:
        print(f"Requirement: {requirement}")
    for error in estimate.line_errors:
        print(f"Skipped line {error.index + 1} ({error.name}): {error.message}")
    print(f"Report saved to: {pdf_path}")


if __name__ == "__main__":
    main()
