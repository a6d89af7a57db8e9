"""
ProductStatsHandler.

Handler for product statistics queries.
"""

from catalog.application.queries.product_stats import ProductStatsQuery
from catalog.domain.statistics import ProductStats, aggregate, aggregate_by_filter
from catalog.ports.product_repository import ProductRepository
from core.instrumentation import get_tracer
from core.metrics import catalog_queries_total

tracer = get_tracer(__name__)


class ProductStatsHandler:
    """Handler for ProductStatsQuery."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repository."""
        self.product_repository = product_repository

    async def handle(self, query: ProductStatsQuery) -> ProductStats:
        """
        Handle product stats query.

        Args:
            query: ProductStatsQuery

        Returns:
            ProductStats for the category, the filter, or the whole catalog
        """
        with tracer.start_as_current_span("catalog.product_stats") as span:
            if query.category is not None:
                catalog_queries_total.labels(operation="categoryStats").inc()
                span.set_attribute("catalog.category", query.category)
                products = await self.product_repository.find_by_category(query.category)
                return aggregate(products)

            products = await self.product_repository.find_all()

            if query.filter is not None:
                catalog_queries_total.labels(operation="productStatsByFilter").inc()
                return aggregate_by_filter(products, query.filter)

            catalog_queries_total.labels(operation="productStats").inc()
            return aggregate(products)
