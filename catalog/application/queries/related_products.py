"""
Recommendation queries.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RelatedProductsQuery:
    """Query for products similar to a product."""

    product_id: int
    max_results: Optional[int] = None


@dataclass
class FrequentlyBoughtTogetherQuery:
    """Query for products bought together with a product."""

    product_id: int
    max_results: Optional[int] = None
