"""
DynamicProductQuery.

Query returning only the requested product attributes.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from catalog.domain.specs import FilterSpec


@dataclass
class DynamicProductQuery:
    """Query for sparse product views."""

    attributes: List[str] = field(default_factory=list)
    filter: Optional[FilterSpec] = None
