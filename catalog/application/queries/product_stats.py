"""
ProductStatsQuery.

Statistics over all products, one category, or a filter.
"""
from dataclasses import dataclass
from typing import Optional

from catalog.domain.specs import FilterSpec


@dataclass
class ProductStatsQuery:
    """Query for product statistics. Category wins over filter when both are set."""

    category: Optional[str] = None
    filter: Optional[FilterSpec] = None
