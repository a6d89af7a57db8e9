"""
SalesReportQuery.

Time-bucketed sales report over the catalog.
"""
from dataclasses import dataclass
from typing import Optional

from catalog.domain.reporting import Timeframe
from catalog.domain.specs import FilterSpec


@dataclass
class SalesReportQuery:
    """Query for a sales report."""

    timeframe: Timeframe = Timeframe.CUSTOM
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    filter: Optional[FilterSpec] = None
