"""
ListProductsQuery.

Query for a filtered, sorted and paginated product listing.
"""
from dataclasses import dataclass
from typing import Optional

from catalog.domain.specs import FilterSpec, PageSpec, SortSpec


@dataclass
class ListProductsQuery:
    """Query to list products with filter, sort and page."""

    filter: Optional[FilterSpec] = None
    sort: Optional[SortSpec] = None
    page: Optional[PageSpec] = None
