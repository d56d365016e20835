"""
Shippable parcel produced by the packer.

Weights are in kilograms (kg), dimensions in whole centimetres (cm) and the
declared value in the store currency rounded to pence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Tuple

MIN_PARCEL_WEIGHT_KG = 0.1
MIN_PARCEL_LENGTH_CM = 10
MIN_PARCEL_WIDTH_CM = 10
MIN_PARCEL_HEIGHT_CM = 5


@dataclass(frozen=True)
class Parcel:
    """Immutable parcel ready to be sent to a carrier quote request."""

    weight_kg: float
    length_cm: int
    width_cm: int
    height_cm: int
    declared_value: Decimal
    line_count: int = field(default=1)

    def __post_init__(self) -> None:
        if self.weight_kg < MIN_PARCEL_WEIGHT_KG:
            raise ValueError(f"weight_kg must be at least {MIN_PARCEL_WEIGHT_KG}, got {self.weight_kg!r}")
        if self.length_cm < MIN_PARCEL_LENGTH_CM or self.width_cm < MIN_PARCEL_WIDTH_CM:
            raise ValueError("parcel length and width must be at least 10 cm")
        if self.height_cm < MIN_PARCEL_HEIGHT_CM:
            raise ValueError("parcel height must be at least 5 cm")
        if self.declared_value < 0:
            raise ValueError("declared_value cannot be negative")

    @property
    def dimensions(self) -> Tuple[int, int, int]:
        return self.length_cm, self.width_cm, self.height_cm

    @property
    def volume_cm3(self) -> int:
        return self.length_cm * self.width_cm * self.height_cm

    def to_dict(self) -> Dict[str, float | int]:
        """Parcel shape expected by carrier quote requests."""
        return {
            "weight": self.weight_kg,
            "length": self.length_cm,
            "width": self.width_cm,
            "height": self.height_cm,
            "value": float(self.declared_value),
        }
