"""
Unit tests for the attribute projector and dynamic product DTOs.
"""

from dataclasses import replace

from catalog.application.dto.product_dto import DynamicProductDTO
from catalog.domain.projection import STANDARD_ATTRIBUTES, project, project_all


class TestProjection:
    """Tests for attribute projection."""

    def test_id_always_included(self, sample_product):
        """Test id is present even when not requested."""
        view = project(sample_product, ["name"])
        assert list(view) == ["id", "name"]
        assert view["id"] == 1

    def test_standard_attributes(self, sample_product):
        """Test API attribute names map to product fields."""
        view = project(sample_product, ["price", "inStock", "stockQuantity", "tags"])

        assert view["price"] == 249.99
        assert view["inStock"] is True
        assert view["stockQuantity"] == 25
        assert view["tags"] == ["audio", "wireless", "bluetooth"]

    def test_unknown_attributes_dropped(self, sample_product):
        """Test unknown names do not appear in the view."""
        view = project(sample_product, ["name", "weight"])
        assert "weight" not in view

    def test_custom_attribute_lookup(self, sample_product):
        """Test non-standard names fall back to custom attributes."""
        product = sample_product.add_custom_attribute("color", "black")
        assert project(product, ["color"]) == {"id": 1, "color": "black"}

    def test_missing_standard_value_uses_custom_attribute(self, sample_product):
        """Test a None standard field falls back to a custom attribute of that name."""
        product = replace(sample_product, rating=None).add_custom_attribute("rating", "n/a")
        assert project(product, ["rating"])["rating"] == "n/a"

    def test_missing_value_omitted(self, sample_product):
        """Test attributes without a value are left out."""
        product = replace(sample_product, category=None)
        assert "category" not in project(product, ["category"])

    def test_duplicate_names(self, sample_product):
        """Test duplicates appear once."""
        assert list(project(sample_product, ["name", "name", "id"])) == ["id", "name"]

    def test_project_all_preserves_order(self, catalog_products):
        """Test one view per product in input order."""
        views = project_all(catalog_products[:3], ["name"])
        assert [view["id"] for view in views] == [1, 2, 3]

    def test_standard_attribute_names(self):
        """Test the registry exposes API names."""
        assert "stockQuantity" in STANDARD_ATTRIBUTES
        assert "createdAt" in STANDARD_ATTRIBUTES


class TestDynamicProductDTO:
    """Tests for DynamicProductDTO."""

    def test_values_rendered_as_strings(self, sample_product):
        """Test every projected value is rendered as text."""
        dto = DynamicProductDTO.from_projection(
            project(sample_product, ["name", "price", "inStock", "tags"])
        )

        assert dto.id == "1"
        assert dto.as_dict() == {
            "id": "1",
            "name": "Noise-Cancelling Headphones",
            "price": "249.99",
            "inStock": "true",
            "tags": "audio,wireless,bluetooth",
        }
