"""
Predicate engine.

Compiles a FilterSpec into a product predicate and applies it, plus the
sort and page helpers used by product listings. Everything here is a pure
function over caller-supplied snapshots.
"""

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

from catalog.domain.product import Product
from catalog.domain.specs import FilterSpec, PageSpec, SortField, SortSpec

logger = logging.getLogger(__name__)

Check = Callable[[Product], bool]


def _timestamp_text(value) -> Optional[str]:
    """Comparable ISO text for a date bound; None for unusable values."""
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    return None


def _compile(spec: FilterSpec) -> List[Check]:
    checks: List[Check] = []

    if spec.name_contains:
        needle = spec.name_contains.lower()
        checks.append(lambda p: p.name is not None and needle in p.name.lower())

    if spec.min_price is not None:
        checks.append(lambda p: p.price is not None and p.price >= spec.min_price)

    if spec.max_price is not None:
        checks.append(lambda p: p.price is not None and p.price <= spec.max_price)

    if spec.categories:
        checks.append(lambda p: p.category is not None and p.category in spec.categories)

    if spec.in_stock is not None:
        checks.append(lambda p: bool(p.in_stock) == spec.in_stock)

    if spec.min_rating is not None:
        checks.append(lambda p: p.rating is not None and p.rating >= spec.min_rating)

    if spec.has_tags:
        checks.append(lambda p: any(tag in spec.has_tags for tag in p.tags or ()))

    if spec.min_stock_quantity is not None:
        checks.append(
            lambda p: p.stock_quantity is not None
            and p.stock_quantity >= spec.min_stock_quantity
        )

    if spec.min_popularity is not None:
        checks.append(
            lambda p: p.popularity is not None and p.popularity >= spec.min_popularity
        )

    after = _timestamp_text(spec.created_after)
    if spec.created_after is not None and after is None:
        logger.warning("Ignoring unusable created_after bound: %r", spec.created_after)
    if after is not None:
        checks.append(lambda p: p.created_at is not None and p.created_at >= after)

    before = _timestamp_text(spec.created_before)
    if spec.created_before is not None and before is None:
        logger.warning("Ignoring unusable created_before bound: %r", spec.created_before)
    if before is not None:
        checks.append(lambda p: p.created_at is not None and p.created_at <= before)

    return checks


class ProductPredicate:
    """
    A FilterSpec compiled into a callable.

    Each present field becomes one check; a product matches when every
    check passes. A product missing a constrained attribute fails that check.
    """

    def __init__(self, spec: Optional[FilterSpec] = None):
        """
        Compile the filter.

        Args:
            spec: Filter to compile (None matches everything)
        """
        self.spec = spec or FilterSpec()
        self._checks = _compile(self.spec)

    def __call__(self, product: Product) -> bool:
        return all(check(product) for check in self._checks)

    @property
    def constraint_count(self) -> int:
        """Number of active constraints."""
        return len(self._checks)


def matches(product: Product, spec: Optional[FilterSpec]) -> bool:
    """
    Check a single product against a filter.

    Args:
        product: Product to test
        spec: Filter (None or empty matches every product)

    Returns:
        True if every present constraint holds
    """
    return ProductPredicate(spec)(product)


def filter_products(products: Iterable[Product], spec: Optional[FilterSpec]) -> List[Product]:
    """
    Apply a filter to a collection, preserving input order.
    """
    products = list(products)
    if spec is None or spec.is_empty:
        return products
    predicate = ProductPredicate(spec)
    result = [product for product in products if predicate(product)]
    logger.debug(
        "Filter with %d constraint(s) kept %d of %d product(s)",
        predicate.constraint_count,
        len(result),
        len(products),
    )
    return result


_SORT_KEYS = {
    SortField.ID: lambda p: p.id,
    SortField.NAME: lambda p: p.name,
    SortField.PRICE: lambda p: p.price,
    SortField.RATING: lambda p: p.rating,
    SortField.CREATED_AT: lambda p: p.created_at,
}


def sort_products(products: Iterable[Product], sort: Optional[SortSpec] = None) -> List[Product]:
    """
    Sort products by one field. Stable; None values always sort last.
    """
    sort = sort or SortSpec()
    key = _SORT_KEYS[sort.field]
    products = list(products)
    present = [p for p in products if key(p) is not None]
    missing = [p for p in products if key(p) is None]
    present.sort(key=key, reverse=sort.descending)
    return present + missing


def paginate(products: List[Product], page: Optional[PageSpec] = None) -> List[Product]:
    """Return one page of an already ordered list."""
    page = page or PageSpec()
    return products[page.offset : page.offset + page.size]
