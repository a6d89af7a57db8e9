"""
Similarity scorer.

Heuristic scores between two products, evaluated from the base product's
side, and the rankings built on them. Two named strategies exist because
their call sites weight shared tags and price proximity differently.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from catalog.domain.product import Product

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 5

CATEGORY_POINTS = 5
RATING_POINTS = 2
RATING_TOLERANCE = 0.5


def price_within_relative_difference(base: Product, candidate: Product) -> bool:
    """|base - candidate| / base < 0.2."""
    if not base.price or candidate.price is None:
        return False
    return abs(base.price - candidate.price) / base.price < 0.2


def price_within_ratio(base: Product, candidate: Product) -> bool:
    """0.8 <= base / candidate <= 1.2."""
    if base.price is None or not candidate.price:
        return False
    return 0.8 <= base.price / candidate.price <= 1.2


@dataclass(frozen=True)
class SimilarityStrategy:
    """
    Point weights for one scoring variant.

    Attributes:
        name: Strategy name
        tag_points: Points per shared tag
        price_points: Points when prices are close
        price_test: Closeness test for the two prices
    """

    name: str
    tag_points: int
    price_points: int
    price_test: Callable[[Product, Product], bool]

    def score(self, base: Product, candidate: Product) -> int:
        """Score ``candidate`` against ``base``."""
        score = 0

        if base.category is not None and base.category == candidate.category:
            score += CATEGORY_POINTS

        if self.price_test(base, candidate):
            score += self.price_points

        if base.tags and candidate.tags:
            shared = set(base.tags).intersection(candidate.tags)
            score += self.tag_points * len(shared)

        if base.rating is not None and candidate.rating is not None:
            if abs(base.rating - candidate.rating) <= RATING_TOLERANCE:
                score += RATING_POINTS

        return score


# Related-products ranking
RELATED = SimilarityStrategy(
    name="related",
    tag_points=1,
    price_points=2,
    price_test=price_within_relative_difference,
)

# Dynamic-query helper; favours shared tags
WEIGHTED = SimilarityStrategy(
    name="weighted",
    tag_points=2,
    price_points=3,
    price_test=price_within_ratio,
)


def score(base: Product, candidate: Product, strategy: SimilarityStrategy = RELATED) -> int:
    """
    Compute the similarity of ``candidate`` to ``base``.

    Args:
        base: Product the ranking is built for
        candidate: Product being scored
        strategy: Scoring variant

    Returns:
        Non-negative integer score
    """
    return strategy.score(base, candidate)


def rank_similar(
    base: Product,
    candidates: Iterable[Product],
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
    strategy: SimilarityStrategy = RELATED,
) -> List[Product]:
    """
    Rank candidates by similarity to ``base``.

    The base product itself is skipped. Ties keep the candidates' input
    order.

    Args:
        base: Product the ranking is built for
        candidates: Products to score
        max_results: Maximum number of results (None means 5)
        strategy: Scoring variant

    Returns:
        Top products by descending score
    """
    limit = DEFAULT_MAX_RESULTS if max_results is None else max_results
    if limit <= 0:
        return []
    scored = [
        (strategy.score(base, candidate), candidate)
        for candidate in candidates
        if candidate.id != base.id
    ]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in scored[:limit]]


def find_related(
    product_id,
    products: Iterable[Product],
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
    strategy: SimilarityStrategy = RELATED,
) -> List[Product]:
    """
    Find products related to ``product_id`` within a snapshot.

    Returns:
        Ranked products, or an empty list if the id is not in the snapshot
    """
    products = list(products)
    base = next((p for p in products if p.id == product_id), None)
    if base is None:
        logger.info("Product %s not found, no related products", product_id)
        return []
    return rank_similar(base, products, max_results, strategy)


def find_frequently_bought_together(
    product_id,
    products: Iterable[Product],
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
) -> List[Product]:
    """
    Find products frequently bought together with ``product_id``.

    No co-purchase signal is available, so this uses the related-products
    ranking. Swap the body for an order-history source when one exists.
    """
    return find_related(product_id, products, max_results, RELATED)
