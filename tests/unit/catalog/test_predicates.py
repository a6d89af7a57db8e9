"""
Unit tests for the predicate engine and query specifications.
"""

from dataclasses import replace
from datetime import date

import pytest

from catalog.domain.predicates import (
    ProductPredicate,
    filter_products,
    matches,
    paginate,
    sort_products,
)
from catalog.domain.product import Product
from catalog.domain.specs import FilterSpec, PageSpec, SortDirection, SortField, SortSpec


def _product(product_id, name, price, **kwargs):
    return Product.create(name=name, price=price, product_id=product_id, **kwargs)


class TestFilterSpec:
    """Tests for FilterSpec."""

    def test_empty_filter(self):
        """Test a default filter has no constraints."""
        assert FilterSpec().is_empty is True
        assert FilterSpec(min_price=1).is_empty is False

    def test_collections_are_frozen(self):
        """Test list inputs become frozensets."""
        spec = FilterSpec(categories=["Audio", "Gaming"], has_tags=["wireless"])
        assert spec.categories == frozenset({"Audio", "Gaming"})
        assert spec.has_tags == frozenset({"wireless"})

    def test_from_dict_accepts_api_names(self):
        """Test camelCase and snake_case keys."""
        spec = FilterSpec.from_dict(
            {"nameContains": "phone", "min_price": 10, "inStock": True, "unknown": 1}
        )
        assert spec.name_contains == "phone"
        assert spec.min_price == 10
        assert spec.in_stock is True

    def test_from_dict_none(self):
        """Test a missing filter is empty."""
        assert FilterSpec.from_dict(None).is_empty is True


class TestSortAndPageSpec:
    """Tests for SortSpec and PageSpec."""

    def test_sort_spec_parses_strings(self):
        """Test field and direction names are parsed."""
        spec = SortSpec(field="createdAt", direction="desc")
        assert spec.field == SortField.CREATED_AT
        assert spec.direction == SortDirection.DESC
        assert spec.descending is True

    def test_unknown_sort_field_defaults_to_id(self):
        """Test unknown fields fall back to ID."""
        assert SortSpec(field="weight").field == SortField.ID

    def test_page_spec_validation(self):
        """Test invalid pages are rejected."""
        with pytest.raises(ValueError):
            PageSpec(page=-1)
        with pytest.raises(ValueError):
            PageSpec(size=0)

    def test_page_offset(self):
        """Test offset computation."""
        assert PageSpec(page=2, size=5).offset == 10


class TestPredicates:
    """Tests for filter predicates."""

    @pytest.fixture
    def products(self):
        """Small product set."""
        return [
            _product(1, "Gaming Mouse", 49.99, category="Gaming", rating=4.1, tags=["gaming"]),
            _product(2, "Gaming Chair", 299.0, category="Gaming", stock_quantity=0),
            _product(3, "Desk Lamp", 25.0, category="Office", rating=3.5, popularity=40),
            _product(4, "Phone Stand", 15.0, rating=4.8, tags=["office", "phone"]),
        ]

    def test_empty_filter_matches_everything(self, products):
        """Test None and empty filters keep all products in order."""
        assert filter_products(products, None) == products
        assert filter_products(products, FilterSpec()) == products

    def test_name_contains_is_case_insensitive(self, products):
        """Test substring match on the name."""
        result = filter_products(products, FilterSpec(name_contains="GAMING"))
        assert [p.id for p in result] == [1, 2]

    def test_empty_name_is_no_constraint(self, products):
        """Test an empty substring does not filter."""
        assert filter_products(products, FilterSpec(name_contains="")) == products

    def test_price_bounds_inclusive(self, products):
        """Test min and max price are inclusive."""
        result = filter_products(products, FilterSpec(min_price=25.0, max_price=49.99))
        assert [p.id for p in result] == [1, 3]

    def test_categories_exclude_uncategorized(self, products):
        """Test a product without category fails a category filter."""
        result = filter_products(products, FilterSpec(categories={"Gaming", "Office"}))
        assert [p.id for p in result] == [1, 2, 3]

    def test_empty_categories_is_no_constraint(self, products):
        """Test an empty category set does not filter."""
        assert filter_products(products, FilterSpec(categories=set())) == products

    def test_in_stock(self, products):
        """Test availability filter in both directions."""
        assert [p.id for p in filter_products(products, FilterSpec(in_stock=False))] == [2]
        assert len(filter_products(products, FilterSpec(in_stock=True))) == 3

    def test_min_rating_excludes_unrated(self, products):
        """Test products without rating fail a rating filter."""
        result = filter_products(products, FilterSpec(min_rating=4.0))
        assert [p.id for p in result] == [1, 4]

    def test_has_tags_matches_any(self, products):
        """Test tag filter matches any listed tag."""
        result = filter_products(products, FilterSpec(has_tags={"phone", "gaming"}))
        assert [p.id for p in result] == [1, 4]

    def test_stock_and_popularity(self, products):
        """Test minimum stock and popularity."""
        assert [p.id for p in filter_products(products, FilterSpec(min_popularity=10))] == [3]
        assert len(filter_products(products, FilterSpec(min_stock_quantity=1))) == 3

    def test_created_range(self, products):
        """Test created_at bounds compare ISO timestamps."""
        stamped = [
            replace(products[0], created_at="2024-01-10T00:00:00+00:00"),
            replace(products[1], created_at="2024-03-01T00:00:00+00:00"),
            replace(products[2], created_at=None),
        ]
        spec = FilterSpec(created_after="2024-01-01", created_before="2024-02-01")
        assert [p.id for p in filter_products(stamped, spec)] == [1]

    def test_created_range_accepts_dates(self, products):
        """Test date objects are usable as bounds."""
        stamped = replace(products[0], created_at="2024-01-10T00:00:00+00:00")
        assert matches(stamped, FilterSpec(created_after=date(2024, 1, 1))) is True
        assert matches(stamped, FilterSpec(created_after=date(2024, 2, 1))) is False

    def test_constraints_are_anded(self, products):
        """Test every constraint must hold."""
        spec = FilterSpec(categories={"Gaming"}, in_stock=True, max_price=100)
        assert [p.id for p in filter_products(products, spec)] == [1]

    def test_predicate_constraint_count(self):
        """Test only set fields become checks."""
        assert ProductPredicate(FilterSpec()).constraint_count == 0
        assert ProductPredicate(FilterSpec(min_price=1, in_stock=True)).constraint_count == 2

    def test_filter_accepts_generators(self, products):
        """Test any iterable is accepted."""
        result = filter_products((p for p in products), FilterSpec(min_price=100))
        assert [p.id for p in result] == [2]


class TestSortAndPaginate:
    """Tests for sorting and pagination."""

    @pytest.fixture
    def products(self):
        """Products with a missing rating."""
        return [
            _product(3, "Charlie", 30.0, rating=4.0),
            _product(1, "Alpha", 10.0),
            _product(2, "Bravo", 20.0, rating=4.0),
        ]

    def test_default_sort_by_id(self, products):
        """Test default sort is id ascending."""
        assert [p.id for p in sort_products(products)] == [1, 2, 3]

    def test_sort_descending(self, products):
        """Test descending price sort."""
        result = sort_products(products, SortSpec(SortField.PRICE, SortDirection.DESC))
        assert [p.id for p in result] == [3, 2, 1]

    def test_missing_values_sort_last(self, products):
        """Test None ratings are placed last in both directions."""
        ascending = sort_products(products, SortSpec(SortField.RATING))
        descending = sort_products(products, SortSpec(SortField.RATING, SortDirection.DESC))
        assert ascending[-1].id == 1
        assert descending[-1].id == 1

    def test_sort_is_stable(self, products):
        """Test equal keys keep input order."""
        result = sort_products(products, SortSpec(SortField.RATING))
        assert [p.id for p in result] == [3, 2, 1]

    def test_paginate(self, products):
        """Test page slicing."""
        ordered = sort_products(products)
        assert [p.id for p in paginate(ordered, PageSpec(page=1, size=2))] == [3]
        assert paginate(ordered, PageSpec(page=5, size=2)) == []
