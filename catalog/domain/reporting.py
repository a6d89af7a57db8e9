"""
Period bucketer and sales report generator.

A date range is split into calendar-aligned periods for a timeframe, then
every period gets sales figures from a DemandEstimator. There is no order
ledger yet, so the default estimator synthesizes plausible numbers from
product attributes.
"""

import calendar
import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Iterable, List, Optional

from catalog.domain.predicates import filter_products
from catalog.domain.product import Product
from catalog.domain.specs import FilterSpec
from core.instrumentation import get_tracer
from core.metrics import report_generation_duration_seconds, report_periods_total

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_TOP_SELLERS = 5


class Timeframe(Enum):
    """Report granularity."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: Any) -> "Timeframe":
        """Resolve a timeframe name; anything unrecognized is CUSTOM."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        if value is not None:
            logger.warning("Unknown timeframe %r, using a single custom period", value)
        return cls.CUSTOM

    def __str__(self) -> str:
        """Return timeframe as string."""
        return self.value


@dataclass(frozen=True)
class PeriodBoundary:
    """An inclusive date window with a display label."""

    label: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class TopSellingProduct:
    """A best seller within a period."""

    product_id: str
    name: str
    units_sold: int
    revenue: float


@dataclass(frozen=True)
class SalesReportPeriod:
    """Sales figures for one period."""

    label: str
    start_date: date
    end_date: date
    total_sales: int
    total_revenue: float
    average_order_value: float
    top_selling_products: List[TopSellingProduct] = field(default_factory=list)


def parse_report_date(value: Any, today: Optional[date] = None) -> date:
    """
    Parse an ISO-8601 date or date-time.

    Args:
        value: ISO string, date or datetime
        today: Fallback date (defaults to the current date)

    Returns:
        Parsed date, or ``today`` when missing or unparseable
    """
    fallback = today or date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return fallback
    text = value.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning("Unparseable report date %r, using %s", value, fallback)
        return fallback


def _add_days(day: date, days: int) -> Optional[date]:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None


def _add_months(day: date, months: int) -> Optional[date]:
    month_index = day.month - 1 + months
    try:
        return date(day.year + month_index // 12, month_index % 12 + 1, 1)
    except ValueError:
        return None


def _calendar_windows(start: date, end: date, months: int, label) -> List[PeriodBoundary]:
    periods = []
    window_start = start
    while window_start is not None and window_start <= end:
        next_start = _add_months(window_start, months)
        # Past date.max the window runs to the end of the range
        window_end = end if next_start is None else min(next_start - timedelta(days=1), end)
        periods.append(PeriodBoundary(label(window_start), window_start, window_end))
        window_start = next_start
    return periods


def split_periods(timeframe: Timeframe, start: date, end: date) -> List[PeriodBoundary]:
    """
    Partition [start, end] into contiguous periods.

    Weekly windows start at ``start``; monthly, quarterly and yearly
    windows are calendar-aligned and begin at the window containing
    ``start``. Every window is clipped to ``end``. A reversed range has no
    calendar periods; CUSTOM always yields one period.
    """
    timeframe = Timeframe.parse(timeframe)

    if end < start and timeframe != Timeframe.CUSTOM:
        logger.warning("Report range %s to %s is reversed, no periods", start, end)
        return []

    if timeframe == Timeframe.DAILY:
        days = (end - start).days + 1
        return [
            PeriodBoundary(day.isoformat(), day, day)
            for day in (start + timedelta(days=offset) for offset in range(max(days, 0)))
        ]

    if timeframe == Timeframe.WEEKLY:
        periods = []
        week_start = start
        while week_start is not None and week_start <= end:
            week_end = _add_days(week_start, 6)
            week_end = end if week_end is None else min(week_end, end)
            periods.append(
                PeriodBoundary(
                    f"Week {week_start.isoformat()} to {week_end.isoformat()}",
                    week_start,
                    week_end,
                )
            )
            week_start = _add_days(week_start, 7)
        return periods

    if timeframe == Timeframe.MONTHLY:
        return _calendar_windows(
            start.replace(day=1),
            end,
            1,
            lambda d: f"{calendar.month_name[d.month].upper()} {d.year}",
        )

    if timeframe == Timeframe.QUARTERLY:
        quarter_month = (start.month - 1) // 3 * 3 + 1
        return _calendar_windows(
            date(start.year, quarter_month, 1),
            end,
            3,
            lambda d: f"Q{(d.month - 1) // 3 + 1} {d.year}",
        )

    if timeframe == Timeframe.YEARLY:
        return _calendar_windows(date(start.year, 1, 1), end, 12, lambda d: str(d.year))

    return [PeriodBoundary(f"{start.isoformat()} to {end.isoformat()}", start, end)]


class DemandEstimator(ABC):
    """Source of sales figures for a period."""

    @abstractmethod
    def estimate_order_count(self, products: List[Product], period: PeriodBoundary) -> int:
        """
        Number of orders placed in the period.

        Args:
            products: Products in scope
            period: Period being reported
        """
        pass

    @abstractmethod
    def estimate_units_sold(self, product: Product, period: PeriodBoundary) -> int:
        """
        Units of one product sold in the period.

        Args:
            product: Product in scope
            period: Period being reported
        """
        pass


class SimulatedDemandEstimator(DemandEstimator):
    """
    Synthesizes sales from product attributes.

    Popular, available and well-rated products sell more. Pass a seed (or
    a ``random.Random``) for reproducible figures.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """Initialize estimator."""
        self._random = rng or random.Random(seed)

    def estimate_order_count(self, products: List[Product], period: PeriodBoundary) -> int:
        """Between n and 6n - 1 orders for n products."""
        count = len(products)
        if count == 0:
            return 0
        return self._random.randrange(count * 5) + count

    def estimate_units_sold(self, product: Product, period: PeriodBoundary) -> int:
        """Popularity-based units with availability and rating boosts."""
        units = max(1, (product.popularity or 0) // 10)
        units *= self._random.randint(1, 5)
        if product.in_stock:
            units *= 2
        if product.rating is not None and product.rating >= 4.0:
            units = int(units * 1.5)
        return max(1, units)


class ReportGenerator:
    """Builds time-bucketed sales reports over a product snapshot."""

    def __init__(
        self,
        estimator: Optional[DemandEstimator] = None,
        top_sellers: int = DEFAULT_TOP_SELLERS,
    ):
        """
        Initialize generator.

        Args:
            estimator: Demand source (defaults to SimulatedDemandEstimator)
            top_sellers: Number of best sellers reported per period
        """
        self.estimator = estimator or SimulatedDemandEstimator()
        self.top_sellers = top_sellers

    def generate(
        self,
        products: Iterable[Product],
        timeframe: Any = Timeframe.CUSTOM,
        start_date: Any = None,
        end_date: Any = None,
        filter_spec: Optional[FilterSpec] = None,
        today: Optional[date] = None,
    ) -> List[SalesReportPeriod]:
        """
        Generate a sales report.

        Args:
            products: Product snapshot
            timeframe: Timeframe or its name (unknown names mean CUSTOM)
            start_date: ISO date/date-time string (defaults to today)
            end_date: ISO date/date-time string (defaults to today)
            filter_spec: Optional product filter
            today: Reference date for defaults

        Returns:
            One SalesReportPeriod per period, in date order
        """
        timeframe = Timeframe.parse(timeframe)
        started = time.perf_counter()

        with tracer.start_as_current_span("catalog.generate_sales_report") as span:
            selected = filter_products(products, filter_spec)
            start = parse_report_date(start_date, today)
            end = parse_report_date(end_date, today)
            periods = split_periods(timeframe, start, end)

            span.set_attribute("catalog.timeframe", timeframe.value)
            span.set_attribute("catalog.products", len(selected))
            span.set_attribute("catalog.periods", len(periods))

            report = [self.build_period(period, selected) for period in periods]

        report_generation_duration_seconds.labels(timeframe=timeframe.value).observe(
            time.perf_counter() - started
        )
        report_periods_total.labels(timeframe=timeframe.value).inc(len(report))
        logger.info(
            "Generated %s sales report: %d period(s) over %d product(s) from %s to %s",
            timeframe.value,
            len(report),
            len(selected),
            start,
            end,
        )
        return report

    def build_period(self, period: PeriodBoundary, products: List[Product]) -> SalesReportPeriod:
        """Aggregate estimated sales for one period."""
        total_sales = self.estimator.estimate_order_count(products, period)

        sales = []
        total_revenue = 0.0
        for product in products:
            units = self.estimator.estimate_units_sold(product, period)
            revenue = units * product.price
            total_revenue += revenue
            sales.append((product, units, revenue))

        average_order_value = total_revenue / total_sales if total_sales > 0 else 0.0

        sales.sort(key=lambda entry: entry[1], reverse=True)
        top = [
            TopSellingProduct(str(product.id), product.name, units, revenue)
            for product, units, revenue in sales[: self.top_sellers]
        ]

        return SalesReportPeriod(
            label=period.label,
            start_date=period.start_date,
            end_date=period.end_date,
            total_sales=total_sales,
            total_revenue=total_revenue,
            average_order_value=average_order_value,
            top_selling_products=top,
        )
