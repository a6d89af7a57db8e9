"""
Statistics aggregator.

Reduces a product collection into counts, price figures and
distributions. Each distribution entry carries its share of the total
product count as a percentage.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from catalog.domain.predicates import filter_products
from catalog.domain.product import Product
from catalog.domain.specs import FilterSpec
from core.metrics import products_aggregated_total

logger = logging.getLogger(__name__)

LOW_STOCK_LEVEL = 10


@dataclass(frozen=True)
class PriceRangeBucket:
    """Products in a price range [min_price, max_price)."""

    label: str
    min_price: float
    max_price: float
    count: int
    percentage: float


@dataclass(frozen=True)
class CategoryCount:
    """Products in one category."""

    category: Optional[str]
    count: int
    percentage: float


@dataclass(frozen=True)
class RatingCount:
    """Products in one rating bucket."""

    rating: float
    count: int
    percentage: float


@dataclass(frozen=True)
class TagStat:
    """Occurrences of one tag."""

    tag: str
    count: int
    percentage: float


@dataclass(frozen=True)
class ProductStats:
    """Aggregate statistics over a product collection."""

    count: int = 0
    avg_price: float = 0.0
    min_price: float = 0.0
    max_price: float = 0.0
    in_stock_count: int = 0
    out_of_stock_count: int = 0
    low_stock_count: int = 0
    price_distribution: List[PriceRangeBucket] = field(default_factory=list)
    category_distribution: List[CategoryCount] = field(default_factory=list)
    rating_distribution: List[RatingCount] = field(default_factory=list)
    tag_stats: List[TagStat] = field(default_factory=list)

    @property
    def total_products(self) -> int:
        """Alias of ``count``."""
        return self.count


PRICE_RANGES = (
    ("low", 0.0, 100.0),
    ("mid", 100.0, 500.0),
    ("high", 500.0, math.inf),
)


def _percentage(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def rating_bucket(rating: float) -> float:
    """Round a rating half-up to the nearest 0.5."""
    return math.floor(rating * 2 + 0.5) / 2


def _price_distribution(products: List[Product]) -> List[PriceRangeBucket]:
    total = len(products)
    buckets = []
    for label, low, high in PRICE_RANGES:
        count = sum(1 for p in products if low <= p.price < high)
        buckets.append(PriceRangeBucket(label, low, high, count, _percentage(count, total)))
    return buckets


def _by_count(counter: Counter):
    return sorted(counter.items(), key=lambda item: (-item[1], str(item[0])))


def aggregate(products: Iterable[Product]) -> ProductStats:
    """
    Compute statistics for a collection.

    Prices must be populated on every product.

    Args:
        products: Products to reduce

    Returns:
        ProductStats (all zero with empty distributions for no products)
    """
    products = list(products)
    total = len(products)
    if total == 0:
        return ProductStats()

    prices = [p.price for p in products]
    in_stock_count = sum(1 for p in products if p.in_stock)
    low_stock_count = sum(
        1 for p in products if p.in_stock and p.stock_quantity < LOW_STOCK_LEVEL
    )

    categories = Counter(p.category for p in products)
    ratings = Counter(rating_bucket(p.rating) for p in products if p.rating is not None)
    tags = Counter(tag for p in products for tag in p.tags)

    products_aggregated_total.inc(total)
    logger.debug("Aggregated %d product(s)", total)

    return ProductStats(
        count=total,
        avg_price=sum(prices) / total,
        min_price=min(prices),
        max_price=max(prices),
        in_stock_count=in_stock_count,
        out_of_stock_count=total - in_stock_count,
        low_stock_count=low_stock_count,
        price_distribution=_price_distribution(products),
        category_distribution=[
            CategoryCount(category, count, _percentage(count, total))
            for category, count in _by_count(categories)
        ],
        rating_distribution=[
            RatingCount(rating, ratings[rating], _percentage(ratings[rating], total))
            for rating in sorted(ratings)
        ],
        tag_stats=[TagStat(tag, count, _percentage(count, total)) for tag, count in _by_count(tags)],
    )


def aggregate_by_category(products: Iterable[Product], category: str) -> ProductStats:
    """Statistics for products of one category."""
    return aggregate(filter_products(products, FilterSpec(categories={category})))


def aggregate_by_filter(products: Iterable[Product], spec: Optional[FilterSpec]) -> ProductStats:
    """Statistics for products matching a filter."""
    return aggregate(filter_products(products, spec))
