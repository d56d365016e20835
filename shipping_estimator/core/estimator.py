"""
Weight and bounding-box estimation for cart lines.

Catalogue data is often incomplete, so every function here prefers a plausible
estimate over a failure: explicit overrides win, then the unit-of-measure
configuration, then a flat fallback. Only malformed input (non-positive
quantities) is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import ceil, sqrt
from typing import Dict, Optional

from shipping_estimator.models.errors import require_positive_int
from shipping_estimator.models.packaging import PackageDimensions, ProductPackagingConfig
from shipping_estimator.models.units import UnitOfMeasure

logger = logging.getLogger(__name__)

MIN_ITEM_WEIGHT_KG = 0.1
FALLBACK_SOLD_UNIT_WEIGHT_KG = 0.5
FALLBACK_ITEM_WEIGHT_KG = 0.1
DEFAULT_BOX_CM = (30.0, 20.0, 15.0)

# kg per sold unit for a pack of `pack_quantity` items of `unit_size` each
_MASS_PER_SIZE: Dict[UnitOfMeasure, float] = {
    UnitOfMeasure.GRAM: 1 / 1000,
    UnitOfMeasure.KILOGRAM: 1.0,
    UnitOfMeasure.MILLILITRE: 1 / 1000,  # 1 g/ml
    UnitOfMeasure.LITRE: 1.0,  # 1 kg/l
    UnitOfMeasure.CENTILITRE: 1 / 100,
}


@dataclass(frozen=True)
class ItemEstimate:
    weight_kg: float
    dimensions: PackageDimensions

    def to_dict(self) -> dict:
        return {"weight_kg": self.weight_kg, **self.dimensions.to_dict()}


def estimate_unit_weight(unit: Optional[UnitOfMeasure], unit_size: float) -> float:
    """
    Typical weight in kg of one counted item (can, bottle, piece) of a given size.
    """
    if unit is UnitOfMeasure.CAN:
        # 330ml can ~ 350g, 500ml can ~ 520g
        return 0.52 if unit_size > 400 else 0.35
    if unit is UnitOfMeasure.BOTTLE:
        return 0.8 if unit_size > 500 else 0.5
    if unit is UnitOfMeasure.PIECE:
        if unit_size > 1000:
            return 1.0
        if unit_size > 500:
            return 0.5
        return 0.2
    return FALLBACK_ITEM_WEIGHT_KG


def _sold_unit_weight(config: ProductPackagingConfig) -> float:
    unit = config.unit_of_measure
    pack_quantity = config.pack_quantity
    if unit in _MASS_PER_SIZE:
        return pack_quantity * config.unit_size * _MASS_PER_SIZE[unit]
    if config.individual_unit_weight is not None:
        return pack_quantity * config.individual_unit_weight
    if unit.is_counted:
        return pack_quantity * estimate_unit_weight(unit, config.unit_size)
    return pack_quantity * FALLBACK_ITEM_WEIGHT_KG


def calculate_package_weight(config: ProductPackagingConfig, quantity: int = 1) -> float:
    """
    Estimate the weight in kg of `quantity` sold units.

    Priority: explicit total package weight, then the unit configuration,
    then 500 g per sold unit. Computed weights never fall below 100 g.
    """
    quantity = require_positive_int("quantity", quantity)

    if config.total_package_weight is not None:
        return config.total_package_weight * quantity

    if config.has_unit_configuration:
        weight = max(MIN_ITEM_WEIGHT_KG, _sold_unit_weight(config) * quantity)
        logger.debug(
            "Estimated %.3f kg from %s x %s", weight, config.describe(), quantity
        )
        return weight

    logger.debug("No packaging data, assuming %.1f kg per sold unit", FALLBACK_SOLD_UNIT_WEIGHT_KG)
    return max(MIN_ITEM_WEIGHT_KG, quantity * FALLBACK_SOLD_UNIT_WEIGHT_KG)


def _grid_box(pack_quantity: int, max_per_row: int, cell_cm: float, height: float) -> PackageDimensions:
    per_row = min(max_per_row, ceil(sqrt(pack_quantity)))
    rows = ceil(pack_quantity / per_row)
    return PackageDimensions(length=per_row * cell_cm, width=rows * cell_cm, height=height)


def estimate_base_dimensions(
    unit: Optional[UnitOfMeasure],
    unit_size: float,
    pack_quantity: int,
) -> PackageDimensions:
    """
    Approximate the outer box of one sold unit from its contents.
    """
    if unit is UnitOfMeasure.CAN:
        return _grid_box(pack_quantity, 4, 7, 12 if unit_size > 400 else 10)
    if unit is UnitOfMeasure.BOTTLE:
        return _grid_box(pack_quantity, 3, 8, 32 if unit_size > 750 else 25)
    if unit is not None and unit.is_weight:
        # boxed or bagged dry goods
        return PackageDimensions(
            length=min(40, 20 + pack_quantity * 2),
            width=min(30, 15 + pack_quantity * 1.5),
            height=min(25, 10 + pack_quantity * 1),
        )
    if unit is not None and unit.is_volume:
        return PackageDimensions(
            length=min(35, 15 + pack_quantity * 2),
            width=min(25, 15 + pack_quantity * 1),
            height=min(30, 12 + pack_quantity * 1.5),
        )
    length, width, height = DEFAULT_BOX_CM
    return PackageDimensions(length=length, width=width, height=height)


def calculate_package_dimensions(config: ProductPackagingConfig, quantity: int = 1) -> PackageDimensions:
    """
    Estimate the bounding box in cm of `quantity` sold units stacked on top of each other.
    """
    quantity = require_positive_int("quantity", quantity)

    if config.has_explicit_dimensions:
        explicit = config.package_dimensions
        stacks = ceil(quantity / (config.pack_quantity or 1))
        return PackageDimensions(
            length=explicit.length,
            width=explicit.width,
            height=explicit.height * stacks,
        )

    if config.has_unit_configuration:
        base = estimate_base_dimensions(
            config.unit_of_measure, config.unit_size, config.pack_quantity
        )
        packages = ceil(quantity / config.pack_quantity)
        return PackageDimensions(length=base.length, width=base.width, height=base.height * packages)

    length, width, height = DEFAULT_BOX_CM
    return PackageDimensions(length=length, width=width, height=height * quantity)


def estimate_item(config: ProductPackagingConfig, quantity: int = 1) -> ItemEstimate:
    """Weight and dimensions for `quantity` sold units of one product."""
    return ItemEstimate(
        weight_kg=calculate_package_weight(config, quantity),
        dimensions=calculate_package_dimensions(config, quantity),
    )
