"""
Weight-bracket policy for eligible carrier services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from shipping_estimator.models.recommendation import ServiceRecommendation


@dataclass(frozen=True)
class ServiceBracket:
    name: str
    max_weight_kg: float  # inclusive upper bound
    services: Tuple[str, ...]
    warnings: Tuple[str, ...] = field(default=())
    requirements: Tuple[str, ...] = field(default=())

    def recommendation(self) -> ServiceRecommendation:
        return ServiceRecommendation(
            eligible_services=self.services,
            warnings=self.warnings,
            requirements=self.requirements,
            bracket=self.name,
        )


SERVICE_BRACKETS: Tuple[ServiceBracket, ...] = (
    ServiceBracket(
        name="light",
        max_weight_kg=2.0,
        services=("Royal Mail 1st Class", "Royal Mail 2nd Class", "Royal Mail 48", "DPD Local"),
    ),
    ServiceBracket(
        name="standard",
        max_weight_kg=20.0,
        services=("Royal Mail 48", "DPD Local", "DPD Next Day", "Evri Standard"),
    ),
    ServiceBracket(
        name="courier",
        max_weight_kg=30.0,
        services=("DPD Local", "DPD Next Day", "UPS Standard"),
        warnings=("Limited to courier services due to weight",),
    ),
    ServiceBracket(
        name="heavy",
        max_weight_kg=70.0,
        services=("DPD Express", "UPS Express", "TNT Express"),
        warnings=("Heavy parcel - courier services only",),
        requirements=("May require special handling",),
    ),
    ServiceBracket(
        name="pallet",
        max_weight_kg=float("inf"),
        services=("Pallet Freight", "Express Pallet"),
        warnings=("Requires pallet freight service",),
        requirements=("Forklift access required at delivery location",),
    ),
)


def bracket_for_weight(total_weight_kg: float) -> ServiceBracket:
    for bracket in SERVICE_BRACKETS:
        if total_weight_kg <= bracket.max_weight_kg:
            return bracket
    # NaN compares false against every bound
    return SERVICE_BRACKETS[-1]


def recommend_services(total_weight_kg: float) -> ServiceRecommendation:
    """Map a total shipment weight in kg to the eligible service tiers."""
    return bracket_for_weight(total_weight_kg).recommendation()
