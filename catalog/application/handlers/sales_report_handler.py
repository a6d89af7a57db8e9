"""
SalesReportHandler.

Handler for time-bucketed sales report queries.
"""

from datetime import date
from typing import List, Optional

from catalog.application.queries.sales_report import SalesReportQuery
from catalog.domain.reporting import (
    ReportGenerator,
    SalesReportPeriod,
    SimulatedDemandEstimator,
)
from catalog.ports.product_repository import ProductRepository
from core.config import get_catalog_setting
from core.metrics import catalog_queries_total


class SalesReportHandler:
    """Handler for SalesReportQuery."""

    def __init__(
        self,
        product_repository: ProductRepository,
        report_generator: Optional[ReportGenerator] = None,
    ):
        """
        Initialize handler.

        Args:
            product_repository: Product store
            report_generator: Generator to use (defaults to one built from
                the DEMAND_SEED and REPORT_TOP_SELLERS settings)
        """
        self.product_repository = product_repository
        if report_generator is None:
            report_generator = ReportGenerator(
                estimator=SimulatedDemandEstimator(seed=get_catalog_setting("DEMAND_SEED")),
                top_sellers=get_catalog_setting("REPORT_TOP_SELLERS"),
            )
        self.report_generator = report_generator

    async def handle(
        self, query: SalesReportQuery, today: Optional[date] = None
    ) -> List[SalesReportPeriod]:
        """
        Handle sales report query.

        Args:
            query: SalesReportQuery
            today: Reference date for missing bounds

        Returns:
            Report periods in date order
        """
        catalog_queries_total.labels(operation="salesReport").inc()
        products = await self.product_repository.find_all()
        return self.report_generator.generate(
            products,
            timeframe=query.timeframe,
            start_date=query.start_date,
            end_date=query.end_date,
            filter_spec=query.filter,
            today=today,
        )
