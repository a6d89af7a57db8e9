"""
Query specifications: filter, sort and page.

Value objects describing what a caller wants to read. Every field of
FilterSpec is optional; an unset field is no constraint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional


class SortField(Enum):
    """Sortable product fields."""

    ID = "id"
    NAME = "name"
    PRICE = "price"
    RATING = "rating"
    CREATED_AT = "createdAt"

    @classmethod
    def parse(cls, value: Any) -> "SortField":
        """Resolve a field name (enum name or API name), defaulting to ID."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value in (member.value, member.name) or value.upper() == member.name:
                    return member
        return cls.ID

    def __str__(self) -> str:
        """Return field as string."""
        return self.value


class SortDirection(Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: Any) -> "SortDirection":
        """Resolve a direction, defaulting to ASC."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper().startswith("DESC"):
            return cls.DESC
        return cls.ASC

    def __str__(self) -> str:
        """Return direction as string."""
        return self.value


def _frozen(values) -> Optional[FrozenSet[str]]:
    if values is None:
        return None
    return frozenset(values)


@dataclass(frozen=True)
class FilterSpec:
    """
    Product filter.

    All present fields are AND-ed. ``has_tags`` matches products carrying
    any of the listed tags. ``created_after``/``created_before`` are ISO-8601
    strings compared lexicographically against ``created_at``.
    """

    name_contains: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    categories: Optional[FrozenSet[str]] = None
    in_stock: Optional[bool] = None
    min_rating: Optional[float] = None
    has_tags: Optional[FrozenSet[str]] = None
    min_stock_quantity: Optional[int] = None
    min_popularity: Optional[int] = None
    created_after: Optional[str] = None
    created_before: Optional[str] = None

    def __post_init__(self):
        """Normalize collection fields to frozensets."""
        object.__setattr__(self, "categories", _frozen(self.categories))
        object.__setattr__(self, "has_tags", _frozen(self.has_tags))

    @property
    def is_empty(self) -> bool:
        """True when no constraint is set."""
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FilterSpec":
        """
        Build a filter from API-style (camelCase) or snake_case keys.

        Unknown keys are ignored.
        """
        if not data:
            return cls()
        values = {}
        for name, api_name in _FILTER_KEYS.items():
            if name in data:
                values[name] = data[name]
            elif api_name in data:
                values[name] = data[api_name]
        return cls(**values)


_FILTER_KEYS = {
    "name_contains": "nameContains",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "categories": "categories",
    "in_stock": "inStock",
    "min_rating": "minRating",
    "has_tags": "hasTags",
    "min_stock_quantity": "minStockQuantity",
    "min_popularity": "minPopularity",
    "created_after": "createdAfter",
    "created_before": "createdBefore",
}


@dataclass(frozen=True)
class SortSpec:
    """Sort order for product listings."""

    field: SortField = SortField.ID
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        """Accept plain strings for field and direction."""
        object.__setattr__(self, "field", SortField.parse(self.field))
        object.__setattr__(self, "direction", SortDirection.parse(self.direction))

    @property
    def descending(self) -> bool:
        """Whether the sort is descending."""
        return self.direction == SortDirection.DESC


@dataclass(frozen=True)
class PageSpec:
    """Zero-based page request."""

    page: int = 0
    size: int = 10

    def __post_init__(self):
        """Validate page request."""
        if self.page < 0:
            raise ValueError("Page index cannot be negative")
        if self.size < 1:
            raise ValueError("Page size must be at least 1")

    @property
    def offset(self) -> int:
        """Index of the first element of the page."""
        return self.page * self.size


EMPTY_FILTER = FilterSpec()
