"""
Greedy consolidation of cart lines into carrier parcels.

Lines are taken in cart order and merged into the currently open parcel until
the next line would push it past the weight cap, at which point the parcel is
sealed and a new one is started. This keeps the layout stable and predictable
for a given cart; it is not a count-optimal bin packing, and a lighter line
further down the cart never back-fills an earlier parcel.

Merged parcels grow to the bounding envelope of their largest contributor
(elementwise maximum of length, width and height) rather than summing sizes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from math import floor
from typing import Iterable, List, Optional, Sequence

from shipping_estimator.core.estimator import estimate_item
from shipping_estimator.models.cart import CartLine
from shipping_estimator.models.parcel import (
    MIN_PARCEL_HEIGHT_CM,
    MIN_PARCEL_LENGTH_CM,
    MIN_PARCEL_WEIGHT_KG,
    MIN_PARCEL_WIDTH_CM,
    Parcel,
)

logger = logging.getLogger(__name__)

MAX_PARCEL_WEIGHT_KG = 30.0
_PENNY = Decimal("0.01")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    factor = 10 ** digits
    return floor(value * factor + 0.5) / factor


@dataclass
class _OpenParcel:
    weight: float
    length: float
    width: float
    height: float
    value: Decimal
    line_count: int = 1

    def merge(self, weight: float, length: float, width: float, height: float, value: Decimal) -> None:
        self.weight += weight
        self.value += value
        self.length = max(self.length, length)
        self.width = max(self.width, width)
        self.height = max(self.height, height)
        self.line_count += 1

    def seal(self) -> Parcel:
        return Parcel(
            weight_kg=max(MIN_PARCEL_WEIGHT_KG, round_half_up(self.weight, 3)),
            length_cm=max(MIN_PARCEL_LENGTH_CM, int(round_half_up(self.length))),
            width_cm=max(MIN_PARCEL_WIDTH_CM, int(round_half_up(self.width))),
            height_cm=max(MIN_PARCEL_HEIGHT_CM, int(round_half_up(self.height))),
            declared_value=self.value.quantize(_PENNY, rounding=ROUND_HALF_UP),
            line_count=self.line_count,
        )


def pack_cart(
    lines: Iterable[CartLine],
    max_parcel_weight: float = MAX_PARCEL_WEIGHT_KG,
) -> List[Parcel]:
    """
    Consolidate cart lines into an ordered list of parcels.

    A line heavier than `max_parcel_weight` on its own still gets exactly one
    parcel; lines are never split or refused. Invalid lines raise
    ``PackagingValidationError``.
    """
    if max_parcel_weight <= 0:
        raise ValueError(f"max_parcel_weight must be positive, got {max_parcel_weight!r}")

    open_parcels: List[_OpenParcel] = []
    current: Optional[_OpenParcel] = None

    for line in lines:
        estimate = estimate_item(line.packaging, line.quantity)
        dims = estimate.dimensions
        value = line.line_value

        if current is None or current.weight + estimate.weight_kg > max_parcel_weight:
            if current is not None:
                logger.debug("Sealing parcel at %.3f kg with %d line(s)", current.weight, current.line_count)
            current = _OpenParcel(
                weight=estimate.weight_kg,
                length=dims.length,
                width=dims.width,
                height=dims.height,
                value=value,
            )
            open_parcels.append(current)
            if estimate.weight_kg > max_parcel_weight:
                logger.info(
                    "Line %r weighs %.3f kg, above the %.1f kg parcel cap; shipping it alone",
                    line.name,
                    estimate.weight_kg,
                    max_parcel_weight,
                )
        else:
            current.merge(estimate.weight_kg, dims.length, dims.width, dims.height, value)

    parcels = [parcel.seal() for parcel in open_parcels]
    logger.info("Packed cart into %d parcel(s)", len(parcels))
    return parcels


def total_weight(parcels: Sequence[Parcel]) -> float:
    """Sum of parcel weights in kg, rounded to grams."""
    return round_half_up(sum(parcel.weight_kg for parcel in parcels), 3)
