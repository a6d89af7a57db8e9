"""
Single-product and per-category lookups.
"""
from dataclasses import dataclass


@dataclass
class GetProductQuery:
    """Query to get one product by id."""

    product_id: int


@dataclass
class ProductsByCategoryQuery:
    """Query to list products of a category."""

    category: str
