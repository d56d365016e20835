"""
End-to-end shipment estimate for a cart: estimate, pack, recommend.

Bad lines are reported individually so one malformed product does not block
shipping estimates for the rest of the cart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Tuple

from shipping_estimator.core.packer import MAX_PARCEL_WEIGHT_KG, pack_cart, total_weight
from shipping_estimator.core.recommender import recommend_services
from shipping_estimator.models.cart import CartLine
from shipping_estimator.models.errors import PackagingValidationError
from shipping_estimator.models.parcel import Parcel
from shipping_estimator.models.recommendation import ServiceRecommendation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineError:
    index: int
    name: str
    message: str

    def to_dict(self) -> dict:
        return {"index": self.index, "name": self.name, "message": self.message}


@dataclass(frozen=True)
class ShipmentEstimate:
    parcels: Tuple[Parcel, ...]
    total_weight_kg: float
    declared_value: Decimal
    recommendation: ServiceRecommendation
    line_errors: Tuple[LineError, ...] = field(default=())

    @property
    def parcel_count(self) -> int:
        return len(self.parcels)

    @property
    def has_errors(self) -> bool:
        return bool(self.line_errors)

    def to_dict(self) -> dict:
        return {
            "parcels": [parcel.to_dict() for parcel in self.parcels],
            "total_weight_kg": self.total_weight_kg,
            "declared_value": str(self.declared_value),
            "recommendation": self.recommendation.to_dict(),
            "line_errors": [error.to_dict() for error in self.line_errors],
        }


def lines_from_payload(
    items: Iterable[Mapping[str, Any]],
    start: int = 0,
) -> Tuple[List[CartLine], List[LineError]]:
    """Build cart lines from raw cart items, collecting the ones that fail validation."""
    lines: List[CartLine] = []
    errors: List[LineError] = []
    for index, item in enumerate(items, start):
        try:
            lines.append(CartLine.from_dict(item))
        except PackagingValidationError as exc:
            name = str(item.get("name") or (item.get("product") or {}).get("name") or f"Line {index + 1}")
            logger.warning("Rejected cart line %d (%s): %s", index, name, exc)
            errors.append(LineError(index=index, name=name, message=str(exc)))
    return lines, errors


def estimate_shipment(
    lines: Iterable[CartLine | Mapping[str, Any]],
    max_parcel_weight: float = MAX_PARCEL_WEIGHT_KG,
    line_errors: Iterable[LineError] = (),
) -> ShipmentEstimate:
    """
    Pack the valid lines of a cart and recommend services for the total weight.

    Lines may be ``CartLine`` instances or raw cart items; raw items that fail
    validation are skipped and returned as ``LineError``s. Errors already
    collected by ``lines_from_payload`` can be passed in as ``line_errors``.
    """
    valid: List[CartLine] = []
    errors: List[LineError] = list(line_errors)
    for index, line in enumerate(lines):
        if isinstance(line, CartLine):
            valid.append(line)
            continue
        built, rejected = lines_from_payload([line], start=index)
        valid.extend(built)
        errors.extend(rejected)

    parcels = pack_cart(valid, max_parcel_weight=max_parcel_weight)
    weight = total_weight(parcels)
    declared_value = sum((parcel.declared_value for parcel in parcels), Decimal("0.00"))
    return ShipmentEstimate(
        parcels=tuple(parcels),
        total_weight_kg=weight,
        declared_value=declared_value,
        recommendation=recommend_services(weight),
        line_errors=tuple(errors),
    )
