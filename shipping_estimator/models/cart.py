"""
Cart line model consumed by the parcel packer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping

from shipping_estimator.models.errors import PackagingValidationError, require_positive_int
from shipping_estimator.models.packaging import ProductPackagingConfig


def _to_decimal(name: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise PackagingValidationError(name, value, f"{name} must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise PackagingValidationError(name, value, f"{name} must be a number, got {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise PackagingValidationError(name, value, f"{name} cannot be negative, got {value!r}")
    return amount


@dataclass(frozen=True)
class CartLine:
    """One product in the cart with the quantity of sold units requested."""

    packaging: ProductPackagingConfig
    unit_price: Decimal
    quantity: int
    name: str = field(default="Item")

    def __post_init__(self) -> None:
        if isinstance(self.packaging, Mapping):
            object.__setattr__(self, "packaging", ProductPackagingConfig.from_dict(self.packaging))
        object.__setattr__(self, "unit_price", _to_decimal("unit_price", self.unit_price))
        object.__setattr__(self, "quantity", require_positive_int("quantity", self.quantity))

    @property
    def line_value(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "packaging": self.packaging.to_dict(),
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "line_value": str(self.line_value),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CartLine":
        """
        Build a line from a storefront cart item.

        Packaging fields may sit under ``product`` (storefront shape) or
        ``packaging``; prices and quantities may arrive as strings.
        """
        product = payload.get("product") or payload.get("packaging") or {}
        raw_quantity = payload.get("quantity")
        try:
            quantity = int(raw_quantity) if isinstance(raw_quantity, str) else raw_quantity
        except ValueError as exc:
            raise PackagingValidationError(
                "quantity", raw_quantity, f"quantity must be a whole number, got {raw_quantity!r}"
            ) from exc
        name = payload.get("name") or product.get("name") or "Item"
        return cls(
            packaging=ProductPackagingConfig.from_dict(product),
            unit_price=payload.get("unit_price", payload.get("unitPrice", 0)),
            quantity=quantity,
            name=str(name),
        )
