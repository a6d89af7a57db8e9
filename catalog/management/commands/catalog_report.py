"""
Django management command to print catalog analytics.

Seeds the sample catalog into an in-memory store, then prints either the
product statistics or a time-bucketed sales report as JSON.
"""

import asyncio
import json
import logging
from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from catalog.application.handlers.product_stats_handler import ProductStatsHandler
from catalog.application.handlers.sales_report_handler import SalesReportHandler
from catalog.application.queries.product_stats import ProductStatsQuery
from catalog.application.queries.sales_report import SalesReportQuery
from catalog.domain.reporting import ReportGenerator, SimulatedDemandEstimator, Timeframe
from catalog.domain.specs import FilterSpec
from catalog.infrastructure.repositories.in_memory_product_repository import (
    InMemoryProductRepository,
)
from catalog.infrastructure.sample_data import load_sample_catalog
from core.config import get_catalog_setting

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to print catalog statistics or a sales report."""

    help = "Print product statistics (--stats) or a sales report for the sample catalog"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--stats",
            action="store_true",
            help="Print product statistics instead of a sales report",
        )
        parser.add_argument(
            "--timeframe",
            type=str,
            default=Timeframe.MONTHLY.value,
            help="DAILY, WEEKLY, MONTHLY, QUARTERLY, YEARLY or CUSTOM (default: MONTHLY)",
        )
        parser.add_argument(
            "--start",
            type=str,
            default=None,
            help="Report start date, ISO-8601 (default: today)",
        )
        parser.add_argument(
            "--end",
            type=str,
            default=None,
            help="Report end date, ISO-8601 (default: today)",
        )
        parser.add_argument(
            "--category",
            type=str,
            default=None,
            help="Restrict to one category",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Seed for the simulated demand (default: DEMAND_SEED setting)",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=None,
            help="Indent the JSON output",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if options["stats"]:
            payload = asyncio.run(self.build_stats(options))
            summary = f"Statistics computed for {payload['count']} product(s)"
        else:
            payload = asyncio.run(self.build_report(options))
            summary = f"Sales report generated with {len(payload)} period(s)"

        self.stdout.write(json.dumps(payload, indent=options["indent"], default=str))
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(summary))

    async def seed_repository(self) -> InMemoryProductRepository:
        """Create a repository holding the sample catalog."""
        repository = InMemoryProductRepository()
        await load_sample_catalog(repository)
        return repository

    async def build_stats(self, options) -> dict:
        """Compute statistics as a JSON-ready dict."""
        repository = await self.seed_repository()
        stats = await ProductStatsHandler(repository).handle(
            ProductStatsQuery(category=options["category"])
        )
        return asdict(stats)

    async def build_report(self, options) -> list:
        """Generate a sales report as JSON-ready dicts."""
        seed = options["seed"]
        if seed is None:
            seed = get_catalog_setting("DEMAND_SEED")

        timeframe = Timeframe.parse(options["timeframe"])
        if timeframe == Timeframe.CUSTOM and options["timeframe"].upper() != "CUSTOM":
            raise CommandError(f"Unknown timeframe: {options['timeframe']}")

        repository = await self.seed_repository()
        handler = SalesReportHandler(
            repository,
            ReportGenerator(
                estimator=SimulatedDemandEstimator(seed=seed),
                top_sellers=get_catalog_setting("REPORT_TOP_SELLERS"),
            ),
        )
        filter_spec = None
        if options["category"]:
            filter_spec = FilterSpec(categories={options["category"]})

        report = await handler.handle(
            SalesReportQuery(
                timeframe=timeframe,
                start_date=options["start"],
                end_date=options["end"],
                filter=filter_spec,
            )
        )
        logger.info("catalog_report produced %d period(s)", len(report))
        return [asdict(period) for period in report]
