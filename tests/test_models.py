"""
Tests for the packaging, cart, parcel and unit models.
"""
from decimal import Decimal

import pytest

from shipping_estimator.models.cart import CartLine
from shipping_estimator.models.errors import PackagingValidationError
from shipping_estimator.models.packaging import PackageDimensions, ProductPackagingConfig
from shipping_estimator.models.parcel import Parcel
from shipping_estimator.models.units import UnitOfMeasure


class TestUnitOfMeasure:
    """Test unit tag normalisation."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("g", UnitOfMeasure.GRAM),
            ("Grams", UnitOfMeasure.GRAM),
            ("kg", UnitOfMeasure.KILOGRAM),
            ("ML", UnitOfMeasure.MILLILITRE),
            ("litres", UnitOfMeasure.LITRE),
            ("cl", UnitOfMeasure.CENTILITRE),
            ("units", UnitOfMeasure.PIECE),
            ("pieces", UnitOfMeasure.PIECE),
            (" cans ", UnitOfMeasure.CAN),
            ("bottle", UnitOfMeasure.BOTTLE),
        ],
    )
    def test_known_aliases(self, tag, expected):
        assert UnitOfMeasure.parse(tag) is expected

    @pytest.mark.parametrize("tag", ["boxes", "pairs", "tonnes"])
    def test_unrecognised_tags_map_to_other(self, tag):
        assert UnitOfMeasure.parse(tag) is UnitOfMeasure.OTHER

    @pytest.mark.parametrize("tag", ["", "   "])
    def test_blank_tag_is_unknown(self, tag):
        assert UnitOfMeasure.parse(tag) is None
        assert not ProductPackagingConfig(pack_quantity=6, unit_of_measure=tag, unit_size=500).has_unit_configuration

    def test_missing_tag_stays_unknown(self):
        assert UnitOfMeasure.parse(None) is None

    def test_categories(self):
        assert UnitOfMeasure.GRAM.is_weight
        assert UnitOfMeasure.CENTILITRE.is_volume
        assert UnitOfMeasure.CAN.is_counted
        assert not UnitOfMeasure.OTHER.is_counted


class TestProductPackagingConfig:
    """Test packaging validation and parsing."""

    def test_string_unit_is_parsed(self):
        config = ProductPackagingConfig(pack_quantity=12, unit_of_measure="ml", unit_size=330)
        assert config.unit_of_measure is UnitOfMeasure.MILLILITRE
        assert config.has_unit_configuration

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("pack_quantity", 0),
            ("pack_quantity", -3),
            ("unit_size", -1.0),
            ("individual_unit_weight", 0),
            ("total_package_weight", -2.5),
        ],
    )
    def test_non_positive_fields_are_rejected(self, field_name, value):
        with pytest.raises(PackagingValidationError) as exc_info:
            ProductPackagingConfig(**{field_name: value})

        assert exc_info.value.field == field_name
        assert exc_info.value.value == value

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    @pytest.mark.parametrize("field_name", ["unit_size", "individual_unit_weight", "total_package_weight"])
    def test_non_finite_fields_are_rejected(self, field_name, value):
        with pytest.raises(PackagingValidationError) as exc_info:
            ProductPackagingConfig(**{field_name: value})

        assert exc_info.value.field == field_name
        assert "finite" in str(exc_info.value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    @pytest.mark.parametrize("side", ["length", "width", "height"])
    def test_non_finite_dimension_is_rejected(self, side, value):
        dims = {"length": 10, "width": 10, "height": 10, side: value}
        with pytest.raises(PackagingValidationError) as exc_info:
            ProductPackagingConfig(package_dimensions=dims)

        assert exc_info.value.field == side

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_from_dict_rejects_non_finite_strings(self, raw):
        with pytest.raises(PackagingValidationError):
            ProductPackagingConfig.from_dict({"totalPackageWeight": raw})

    def test_fractional_pack_quantity_is_rejected(self):
        with pytest.raises(PackagingValidationError):
            ProductPackagingConfig(pack_quantity=2.5)

    def test_negative_dimension_is_rejected(self):
        with pytest.raises(PackagingValidationError):
            ProductPackagingConfig(package_dimensions={"length": 10, "width": -4, "height": 3})

    def test_legacy_size_alias_fills_unit_size(self):
        with pytest.warns(DeprecationWarning):
            config = ProductPackagingConfig(pack_quantity=24, unit_of_measure="can", size_per_unit=330)

        assert config.unit_size == 330
        assert config.has_unit_configuration

    def test_unit_size_wins_over_legacy_alias(self):
        config = ProductPackagingConfig(
            pack_quantity=24, unit_of_measure="can", unit_size=500, size_per_unit=330
        )
        assert config.unit_size == 500

    def test_from_dict_accepts_storefront_keys(self):
        config = ProductPackagingConfig.from_dict(
            {
                "packQuantity": "6",
                "unitOfMeasure": "bottles",
                "unitSize": "750",
                "individualUnitWeight": None,
                "totalPackageWeight": "",
                "packageDimensions": {"length": 24, "width": 16, "height": 30},
            }
        )
        assert config.pack_quantity == 6
        assert config.unit_of_measure is UnitOfMeasure.BOTTLE
        assert config.unit_size == 750.0
        assert config.total_package_weight is None
        assert config.has_explicit_dimensions

    def test_from_dict_rejects_non_numeric_values(self):
        with pytest.raises(PackagingValidationError) as exc_info:
            ProductPackagingConfig.from_dict({"unitSize": "large"})

        assert exc_info.value.field == "unit_size"

    def test_partial_dimensions_are_incomplete(self):
        dims = PackageDimensions(length=20, width=10)
        assert not dims.is_complete
        assert dims.volume == 0.0

    def test_describe(self, cola_cans):
        assert cola_cans.describe() == "24 x 330 can"
        assert ProductPackagingConfig().describe() == "Unspecified packaging"


class TestCartLine:
    """Test cart line validation."""

    def test_price_is_converted_to_decimal(self):
        line = CartLine(packaging=ProductPackagingConfig(), unit_price=9.99, quantity=3)
        assert line.unit_price == Decimal("9.99")
        assert line.line_value == Decimal("29.97")

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
    def test_invalid_quantity_is_rejected(self, quantity):
        with pytest.raises(PackagingValidationError) as exc_info:
            CartLine(packaging=ProductPackagingConfig(), unit_price="1.00", quantity=quantity)

        assert exc_info.value.field == "quantity"

    @pytest.mark.parametrize("price", ["-0.01", "abc", float("nan")])
    def test_invalid_price_is_rejected(self, price):
        with pytest.raises(PackagingValidationError):
            CartLine(packaging=ProductPackagingConfig(), unit_price=price, quantity=1)

    def test_from_dict_storefront_item(self):
        line = CartLine.from_dict(
            {
                "unitPrice": "12.50",
                "quantity": "4",
                "product": {"name": "Rice", "packQuantity": 10, "unitOfMeasure": "kg", "unitSize": 1},
            }
        )
        assert line.name == "Rice"
        assert line.quantity == 4
        assert line.unit_price == Decimal("12.50")
        assert line.packaging.unit_of_measure is UnitOfMeasure.KILOGRAM

    def test_from_dict_bad_quantity_string(self):
        with pytest.raises(PackagingValidationError):
            CartLine.from_dict({"unitPrice": "1", "quantity": "two", "product": {}})


class TestParcel:
    """Test parcel invariants and serialisation."""

    def test_to_dict_matches_quote_request_shape(self):
        parcel = Parcel(weight_kg=2.5, length_cm=30, width_cm=20, height_cm=15, declared_value=Decimal("19.98"))
        assert parcel.to_dict() == {"weight": 2.5, "length": 30, "width": 20, "height": 15, "value": 19.98}
        assert parcel.volume_cm3 == 9000

    def test_below_minimum_weight_is_rejected(self):
        with pytest.raises(ValueError):
            Parcel(weight_kg=0.05, length_cm=10, width_cm=10, height_cm=5, declared_value=Decimal("0"))

    def test_below_minimum_size_is_rejected(self):
        with pytest.raises(ValueError):
            Parcel(weight_kg=1.0, length_cm=9, width_cm=10, height_cm=5, declared_value=Decimal("0"))
