"""
Unit tests for Product domain entity.
"""

import pytest

from catalog.domain.events import ProductUpdated
from catalog.domain.product import Product
from core.domain.exceptions import InvalidProductError


class TestProductEntity:
    """Tests for Product domain entity."""

    def test_create_product(self):
        """Test creating a product entity."""
        product = Product.create(name="  Webcam ", price=79.99, category="Office", tags=["video"])

        assert product.id is None
        assert product.name == "Webcam"
        assert product.stock_quantity == 10
        assert product.popularity == 0
        assert product.in_stock is True
        assert product.tags == ("video",)
        assert product.created_at == product.updated_at

    def test_create_without_stock_is_out_of_stock(self):
        """Test availability is derived from the stock quantity."""
        product = Product.create(name="Console", price=499.99, stock_quantity=0)
        assert product.in_stock is False

    def test_duplicate_tags_are_dropped(self):
        """Test tags keep first occurrence order without duplicates."""
        product = Product.create(name="Speaker", price=10.0, tags=["audio", "smart", "audio"])
        assert product.tags == ("audio", "smart")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "", "price": 1.0},
            {"name": "Item", "price": -1.0},
            {"name": "Item", "price": 1.0, "stock_quantity": -1},
            {"name": "Item", "price": 1.0, "popularity": -5},
            {"name": "Item", "price": 1.0, "rating": 5.5},
        ],
    )
    def test_invalid_product(self, kwargs):
        """Test entity invariants are enforced."""
        with pytest.raises(InvalidProductError) as exc_info:
            Product.create(**kwargs)
        assert exc_info.value.code == "INVALID_PRODUCT"

    def test_with_stock_quantity_recomputes_availability(self, sample_product):
        """Test the stock setter keeps in_stock consistent."""
        emptied = sample_product.with_stock_quantity(0)
        assert emptied.stock_quantity == 0
        assert emptied.in_stock is False

        restocked = emptied.with_stock_quantity(4)
        assert restocked.in_stock is True

    def test_with_in_stock_leaves_quantity(self, sample_product):
        """Test the availability setter does not touch the quantity."""
        updated = sample_product.with_in_stock(False)
        assert updated.in_stock is False
        assert updated.stock_quantity == sample_product.stock_quantity

    def test_price_change_tracking(self, sample_product):
        """Test previous price is remembered by with_price."""
        assert sample_product.has_price_changed() is False

        updated = sample_product.with_price(199.99)
        assert updated.previous_price == 249.99
        assert updated.has_price_changed() is True
        assert updated.price_change_percentage() == pytest.approx(-20.0, abs=0.01)
        assert updated.without_previous_price().previous_price is None

    def test_previous_price_not_part_of_equality(self, sample_product):
        """Test previous price does not affect equality."""
        assert sample_product.with_price(sample_product.price) == sample_product

    def test_with_details(self, sample_product):
        """Test partial update of descriptive fields."""
        updated = sample_product.with_details(name="Studio Headphones", rating=4.9)

        assert updated.name == "Studio Headphones"
        assert updated.rating == 4.9
        assert updated.category == sample_product.category
        assert updated.description == sample_product.description

    def test_tags(self, sample_product):
        """Test tag helpers."""
        assert "studio" in sample_product.add_tag("studio").tags
        assert sample_product.add_tag("audio").tags == sample_product.tags
        assert "audio" not in sample_product.remove_tag("audio").tags
        assert sample_product.with_tags(["a", "b"]).tags == ("a", "b")

    def test_custom_attributes(self, sample_product):
        """Test custom attributes are copied, not shared."""
        updated = sample_product.add_custom_attribute("color", "black")

        assert updated.get_custom_attribute("color") == "black"
        assert sample_product.get_custom_attribute("color") is None

    def test_custom_attributes_are_read_only(self):
        """Test later changes to the source dict do not reach the product."""
        attributes = {"color": "black"}
        product = Product.create(name="Lamp", price=30.0, custom_attributes=attributes)
        event = ProductUpdated(product=product)

        attributes["color"] = "white"

        assert event.product.get_custom_attribute("color") == "black"
        with pytest.raises(TypeError):
            product.custom_attributes["color"] = "red"

    def test_related_product_ids(self, sample_product):
        """Test related and frequently-bought-with id lists."""
        updated = sample_product.add_related_product(2).add_related_product(2)
        updated = updated.add_frequently_bought_with(3)

        assert updated.related_product_ids == (2,)
        assert updated.frequently_bought_with_ids == (3,)

    def test_product_is_immutable(self, sample_product):
        """Test products are frozen."""
        with pytest.raises(AttributeError):
            sample_product.price = 1.0
