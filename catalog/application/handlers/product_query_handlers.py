"""
Product query handlers.

Read-side handlers for listings, lookups, sparse views and
recommendations. Every handler reads one snapshot from the repository and
runs the pure domain functions over it.
"""

import logging
import math
from typing import List, Optional

from catalog.application.dto.product_dto import DynamicProductDTO, PageInfo, ProductPage
from catalog.application.queries.dynamic_product_query import DynamicProductQuery
from catalog.application.queries.get_product import GetProductQuery, ProductsByCategoryQuery
from catalog.application.queries.list_products import ListProductsQuery
from catalog.application.queries.related_products import (
    FrequentlyBoughtTogetherQuery,
    RelatedProductsQuery,
)
from catalog.domain.predicates import filter_products, paginate, sort_products
from catalog.domain.product import Product
from catalog.domain.projection import project_all
from catalog.domain.similarity import find_frequently_bought_together, find_related
from catalog.domain.specs import PageSpec
from catalog.ports.product_repository import ProductRepository
from core.config import get_catalog_setting
from core.instrumentation import get_tracer
from core.metrics import catalog_queries_total

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class GetProductHandler:
    """Handler for GetProductQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: GetProductQuery) -> Optional[Product]:
        """
        Handle get product query.

        Returns:
            Product entity or None if not found
        """
        catalog_queries_total.labels(operation="product").inc()
        return await self.product_repository.find_by_id(query.product_id)


class ProductsByCategoryHandler:
    """Handler for ProductsByCategoryQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: ProductsByCategoryQuery) -> List[Product]:
        """Handle products by category query."""
        catalog_queries_total.labels(operation="productsByCategory").inc()
        return await self.product_repository.find_by_category(query.category)


class ListProductsHandler:
    """Handler for ListProductsQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: ListProductsQuery) -> ProductPage:
        """
        Handle list products query.

        Filters, sorts, then slices one page. ``total_elements`` counts the
        filtered products before pagination.

        Args:
            query: ListProductsQuery

        Returns:
            ProductPage with content and page info
        """
        catalog_queries_total.labels(operation="products").inc()
        page = query.page or PageSpec(size=get_catalog_setting("DEFAULT_PAGE_SIZE"))

        with tracer.start_as_current_span("catalog.list_products") as span:
            products = await self.product_repository.find_all()
            selected = sort_products(filter_products(products, query.filter), query.sort)
            content = paginate(selected, page)
            span.set_attribute("catalog.matched", len(selected))

        total = len(selected)
        return ProductPage(
            content=content,
            page_info=PageInfo(
                total_elements=total,
                total_pages=math.ceil(total / page.size),
                current_page=page.page,
                page_size=page.size,
            ),
        )


class DynamicProductQueryHandler:
    """Handler for DynamicProductQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: DynamicProductQuery) -> List[DynamicProductDTO]:
        """
        Handle dynamic product query.

        Returns:
            One DynamicProductDTO per matching product, in store order
        """
        catalog_queries_total.labels(operation="dynamicProductQuery").inc()
        with tracer.start_as_current_span("catalog.dynamic_product_query") as span:
            products = filter_products(await self.product_repository.find_all(), query.filter)
            span.set_attribute("catalog.attributes", len(query.attributes))
            views = project_all(products, query.attributes)
        return [DynamicProductDTO.from_projection(view) for view in views]


class RelatedProductsHandler:
    """Handler for RelatedProductsQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: RelatedProductsQuery) -> List[Product]:
        """
        Handle related products query.

        Returns:
            Ranked similar products (empty if the product does not exist)
        """
        catalog_queries_total.labels(operation="relatedProducts").inc()
        max_results = query.max_results
        if max_results is None:
            max_results = get_catalog_setting("RELATED_MAX_RESULTS")
        with tracer.start_as_current_span("catalog.related_products") as span:
            span.set_attribute("catalog.product_id", str(query.product_id))
            products = await self.product_repository.find_all()
            return find_related(query.product_id, products, max_results)


class FrequentlyBoughtTogetherHandler:
    """Handler for FrequentlyBoughtTogetherQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: FrequentlyBoughtTogetherQuery) -> List[Product]:
        """Handle frequently bought together query."""
        catalog_queries_total.labels(operation="frequentlyBoughtTogether").inc()
        max_results = query.max_results
        if max_results is None:
            max_results = get_catalog_setting("RELATED_MAX_RESULTS")
        products = await self.product_repository.find_all()
        return find_frequently_bought_together(query.product_id, products, max_results)
