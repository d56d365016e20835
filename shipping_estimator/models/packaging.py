"""
Data model describing how a sellable product is physically packaged.

Dimensions are expressed in centimetres (cm) and weights in kilograms (kg).
Every numeric field is optional: a missing value means "unknown, estimate it",
whereas a present value must be strictly positive. Validation is eager so
invalid catalogue data surfaces before the estimator runs.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from shipping_estimator.models.errors import (
    PackagingValidationError,
    optional_positive,
    require_positive_int,
)
from shipping_estimator.models.units import UnitOfMeasure


@dataclass(frozen=True)
class PackageDimensions:
    """Bounding box of one sold unit; any side may be unknown."""

    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", optional_positive("length", self.length))
        object.__setattr__(self, "width", optional_positive("width", self.width))
        object.__setattr__(self, "height", optional_positive("height", self.height))

    @property
    def is_complete(self) -> bool:
        return self.length is not None and self.width is not None and self.height is not None

    @property
    def dimensions(self) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        """Expose dimensions as an (L, W, H) tuple."""
        return self.length, self.width, self.height

    @property
    def volume(self) -> float:
        """Return the cubic volume in cm^3 (0 when any side is unknown)."""
        if not self.is_complete:
            return 0.0
        return self.length * self.width * self.height

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {"length": self.length, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PackageDimensions":
        return cls(
            length=_optional_float("length", payload.get("length")),
            width=_optional_float("width", payload.get("width")),
            height=_optional_float("height", payload.get("height")),
        )


@dataclass(frozen=True)
class ProductPackagingConfig:
    """Immutable packaging description of one sold unit."""

    pack_quantity: Optional[int] = None
    unit_of_measure: Optional[UnitOfMeasure] = None
    unit_size: Optional[float] = None
    individual_unit_weight: Optional[float] = None  # kg per individual item
    total_package_weight: Optional[float] = None  # kg per sold unit
    package_dimensions: Optional[PackageDimensions] = None
    # Deprecated alias of unit_size kept for older catalogue records.
    size_per_unit: Optional[float] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.pack_quantity is not None:
            object.__setattr__(
                self, "pack_quantity", require_positive_int("pack_quantity", self.pack_quantity)
            )
        object.__setattr__(self, "unit_of_measure", UnitOfMeasure.parse(self.unit_of_measure))
        object.__setattr__(self, "unit_size", optional_positive("unit_size", self.unit_size))
        object.__setattr__(self, "size_per_unit", optional_positive("size_per_unit", self.size_per_unit))
        if self.unit_size is None and self.size_per_unit is not None:
            warnings.warn(
                "size_per_unit is deprecated, use unit_size instead",
                DeprecationWarning,
                stacklevel=3,
            )
            object.__setattr__(self, "unit_size", self.size_per_unit)
        object.__setattr__(
            self,
            "individual_unit_weight",
            optional_positive("individual_unit_weight", self.individual_unit_weight),
        )
        object.__setattr__(
            self,
            "total_package_weight",
            optional_positive("total_package_weight", self.total_package_weight),
        )
        if isinstance(self.package_dimensions, Mapping):
            object.__setattr__(
                self, "package_dimensions", PackageDimensions.from_dict(self.package_dimensions)
            )
        elif self.package_dimensions is not None and not isinstance(
            self.package_dimensions, PackageDimensions
        ):
            raise PackagingValidationError(
                "package_dimensions",
                self.package_dimensions,
                "package_dimensions must be a mapping or PackageDimensions",
            )

    @property
    def has_unit_configuration(self) -> bool:
        """True when pack count, unit of measure and unit size are all known."""
        return (
            self.pack_quantity is not None
            and self.unit_of_measure is not None
            and self.unit_size is not None
        )

    @property
    def has_explicit_dimensions(self) -> bool:
        return self.package_dimensions is not None and self.package_dimensions.is_complete

    def describe(self) -> str:
        """Short human readable format such as ``24 x 330 can``."""
        if self.has_unit_configuration:
            return f"{self.pack_quantity} x {self.unit_size:g} {self.unit_of_measure.value}"
        if self.total_package_weight is not None:
            return f"{self.total_package_weight:g} kg per unit"
        return "Unspecified packaging"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the packaging for reporting."""
        return {
            "pack_quantity": self.pack_quantity,
            "unit_of_measure": self.unit_of_measure.value if self.unit_of_measure else None,
            "unit_size": self.unit_size,
            "individual_unit_weight": self.individual_unit_weight,
            "total_package_weight": self.total_package_weight,
            "package_dimensions": (
                self.package_dimensions.to_dict() if self.package_dimensions else None
            ),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProductPackagingConfig":
        """Instantiate from a raw product record (snake_case or camelCase keys)."""
        dimensions = _pick(payload, "package_dimensions", "packageDimensions")
        pack_quantity = _pick(payload, "pack_quantity", "packQuantity")
        return cls(
            pack_quantity=_optional_int("pack_quantity", pack_quantity),
            unit_of_measure=_pick(payload, "unit_of_measure", "unitOfMeasure"),
            unit_size=_optional_float("unit_size", _pick(payload, "unit_size", "unitSize")),
            size_per_unit=_optional_float("size_per_unit", _pick(payload, "size_per_unit", "sizePerUnit")),
            individual_unit_weight=_optional_float(
                "individual_unit_weight",
                _pick(payload, "individual_unit_weight", "individualUnitWeight")
            ),
            total_package_weight=_optional_float(
                "total_package_weight",
                _pick(payload, "total_package_weight", "totalPackageWeight")
            ),
            package_dimensions=(
                PackageDimensions.from_dict(dimensions) if isinstance(dimensions, Mapping) else None
            ),
        )


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None and value != "":
            return value
    return None


def _optional_float(name: str, value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise PackagingValidationError(name, value, f"{name} must be a number, got {value!r}") from exc


def _optional_int(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    number = _optional_float(name, value)
    if not number.is_integer():
        raise PackagingValidationError(name, value, f"{name} must be a whole number, got {value!r}")
    return int(number)
