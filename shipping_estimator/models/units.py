"""
Units of measure understood by the estimator.

Storefront products carry free-text unit tags ("cans", "ml", "Kilograms"...).
They are normalised once into a closed enumeration so every estimation branch
dispatches on a known variant. Tags outside the vocabulary map to ``OTHER``.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class UnitOfMeasure(str, Enum):
    GRAM = "gram"
    KILOGRAM = "kilogram"
    MILLILITRE = "millilitre"
    LITRE = "litre"
    CENTILITRE = "centilitre"
    PIECE = "piece"
    CAN = "can"
    BOTTLE = "bottle"
    OTHER = "other"

    @classmethod
    def parse(cls, tag: "str | UnitOfMeasure | None") -> Optional["UnitOfMeasure"]:
        """Map a raw unit tag to a variant; ``None`` or a blank tag means the unit is unknown."""
        if tag is None:
            return None
        if isinstance(tag, UnitOfMeasure):
            return tag
        key = str(tag).strip().lower()
        if not key:
            return None
        return _ALIASES.get(key, cls.OTHER)

    @property
    def is_weight(self) -> bool:
        return self in (UnitOfMeasure.GRAM, UnitOfMeasure.KILOGRAM)

    @property
    def is_volume(self) -> bool:
        return self in (UnitOfMeasure.MILLILITRE, UnitOfMeasure.LITRE, UnitOfMeasure.CENTILITRE)

    @property
    def is_counted(self) -> bool:
        return self in (UnitOfMeasure.PIECE, UnitOfMeasure.CAN, UnitOfMeasure.BOTTLE)


_ALIASES: Dict[str, UnitOfMeasure] = {
    "g": UnitOfMeasure.GRAM,
    "gram": UnitOfMeasure.GRAM,
    "grams": UnitOfMeasure.GRAM,
    "kg": UnitOfMeasure.KILOGRAM,
    "kilogram": UnitOfMeasure.KILOGRAM,
    "kilograms": UnitOfMeasure.KILOGRAM,
    "ml": UnitOfMeasure.MILLILITRE,
    "millilitre": UnitOfMeasure.MILLILITRE,
    "millilitres": UnitOfMeasure.MILLILITRE,
    "milliliter": UnitOfMeasure.MILLILITRE,
    "milliliters": UnitOfMeasure.MILLILITRE,
    "l": UnitOfMeasure.LITRE,
    "litre": UnitOfMeasure.LITRE,
    "litres": UnitOfMeasure.LITRE,
    "liter": UnitOfMeasure.LITRE,
    "liters": UnitOfMeasure.LITRE,
    "cl": UnitOfMeasure.CENTILITRE,
    "centilitre": UnitOfMeasure.CENTILITRE,
    "centilitres": UnitOfMeasure.CENTILITRE,
    "centiliter": UnitOfMeasure.CENTILITRE,
    "centiliters": UnitOfMeasure.CENTILITRE,
    "piece": UnitOfMeasure.PIECE,
    "pieces": UnitOfMeasure.PIECE,
    "unit": UnitOfMeasure.PIECE,
    "units": UnitOfMeasure.PIECE,
    "can": UnitOfMeasure.CAN,
    "cans": UnitOfMeasure.CAN,
    "bottle": UnitOfMeasure.BOTTLE,
    "bottles": UnitOfMeasure.BOTTLE,
}
