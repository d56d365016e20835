"""
Pytest configuration and fixtures for shipping estimator tests.
"""
from decimal import Decimal

import pytest

from shipping_estimator.models.cart import CartLine
from shipping_estimator.models.packaging import ProductPackagingConfig


@pytest.fixture
def make_line():
    """Factory for cart lines with an explicit weight per sold unit."""

    def _make(weight=None, quantity=1, unit_price="10.00", name="Item", **packaging):
        if weight is not None:
            packaging.setdefault("total_package_weight", weight)
        return CartLine(
            packaging=ProductPackagingConfig(**packaging),
            unit_price=Decimal(unit_price),
            quantity=quantity,
            name=name,
        )

    return _make


@pytest.fixture
def cola_cans() -> ProductPackagingConfig:
    return ProductPackagingConfig(pack_quantity=24, unit_of_measure="can", unit_size=330)


@pytest.fixture
def storefront_cart() -> list:
    """Cart items in the shape the storefront checkout sends them."""
    return [
        {
            "name": "Cola 24 x 330ml Cans",
            "unitPrice": "9.99",
            "quantity": 2,
            "product": {"packQuantity": 24, "unitOfMeasure": "cans", "unitSize": 330},
        },
        {
            "name": "Broken Listing",
            "unitPrice": "5.00",
            "quantity": 0,
            "product": {"packQuantity": 6, "unitOfMeasure": "bottles", "unitSize": 750},
        },
        {
            "name": "Gift Hamper",
            "unitPrice": "35.00",
            "quantity": 1,
            "product": {},
        },
    ]
