"""
Product domain entity.

This is the core domain entity representing a catalog product.
It contains business logic and is independent of infrastructure.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from core.domain.exceptions import InvalidProductError

DEFAULT_STOCK_QUANTITY = 10
DEFAULT_POPULARITY = 0
MAX_RATING = 5.0


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _unique(values: Optional[Iterable]) -> tuple:
    return tuple(dict.fromkeys(values or ()))


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    Immutable: every mutation returns a new instance. ``in_stock`` is
    derived from ``stock_quantity`` by ``create`` and ``with_stock_quantity``;
    ``with_in_stock`` is kept for callers that only toggle availability and
    leaves ``stock_quantity`` untouched.

    ``previous_price`` is set by ``with_price`` and only describes the
    update in progress. Repositories drop it when saving.
    """

    id: Optional[int]
    name: str
    description: str
    price: float
    category: Optional[str]
    in_stock: bool
    rating: Optional[float] = None
    stock_quantity: int = DEFAULT_STOCK_QUANTITY
    popularity: int = DEFAULT_POPULARITY
    tags: Tuple[str, ...] = ()
    custom_attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    related_product_ids: Tuple[int, ...] = ()
    frequently_bought_with_ids: Tuple[int, ...] = ()
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    previous_price: Optional[float] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate product entity."""
        # Read-only copy; the caller's dict is never shared
        object.__setattr__(
            self, "custom_attributes", MappingProxyType(dict(self.custom_attributes or {}))
        )
        if not self.name or len(self.name.strip()) == 0:
            raise InvalidProductError("Product name cannot be empty")
        if self.price is None or self.price < 0:
            raise InvalidProductError("Product price must be zero or positive")
        if self.stock_quantity is None or self.stock_quantity < 0:
            raise InvalidProductError("Stock quantity cannot be negative")
        if self.popularity is None or self.popularity < 0:
            raise InvalidProductError("Popularity cannot be negative")
        if self.rating is not None and not 0.0 <= self.rating <= MAX_RATING:
            raise InvalidProductError(f"Rating must be between 0.0 and {MAX_RATING}")

    @classmethod
    def create(
        cls,
        name: str,
        price: float,
        category: Optional[str] = None,
        description: str = "",
        rating: Optional[float] = None,
        stock_quantity: int = DEFAULT_STOCK_QUANTITY,
        popularity: int = DEFAULT_POPULARITY,
        tags: Optional[Iterable[str]] = None,
        custom_attributes: Optional[Mapping[str, str]] = None,
        product_id: Optional[int] = None,
    ) -> "Product":
        """
        Create a new Product entity.

        Args:
            name: Product display name
            price: Unit price
            category: Free-text category label
            description: Long description
            rating: Optional rating between 0.0 and 5.0
            stock_quantity: Units in stock (default 10)
            popularity: Popularity score (default 0)
            tags: Tags, duplicates are dropped
            custom_attributes: Free-form string attributes
            product_id: Optional id (normally assigned by the store)

        Returns:
            Product entity instance
        """
        now = utc_timestamp()
        return cls(
            id=product_id,
            name=name.strip(),
            description=description or "",
            price=price,
            category=category,
            in_stock=stock_quantity > 0,
            rating=rating,
            stock_quantity=stock_quantity,
            popularity=popularity,
            tags=_unique(tags),
            custom_attributes=dict(custom_attributes or {}),
            created_at=now,
            updated_at=now,
        )

    def with_id(self, product_id: int) -> "Product":
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=product_id)

    def touch(self) -> "Product":
        """Return a copy with a refreshed ``updated_at``."""
        return replace(self, updated_at=utc_timestamp())

    def with_details(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        rating: Optional[float] = None,
    ) -> "Product":
        """
        Update descriptive fields. None keeps the current value.

        Returns:
            New Product instance
        """
        return replace(
            self,
            name=self.name if name is None else name.strip(),
            description=self.description if description is None else description,
            category=self.category if category is None else category,
            rating=self.rating if rating is None else rating,
        )

    def with_stock_quantity(self, stock_quantity: int) -> "Product":
        """
        Set stock quantity and recompute availability.

        Args:
            stock_quantity: New units in stock

        Returns:
            New Product instance with both fields updated
        """
        return replace(self, stock_quantity=stock_quantity, in_stock=stock_quantity > 0)

    def with_in_stock(self, in_stock: bool) -> "Product":
        """
        Set availability only. Does not adjust ``stock_quantity``.
        """
        return replace(self, in_stock=bool(in_stock))

    def with_price(self, price: float) -> "Product":
        """
        Set a new price, remembering the current one as ``previous_price``.
        """
        return replace(self, price=price, previous_price=self.price)

    def has_price_changed(self) -> bool:
        """Whether the pending update changed the price."""
        return self.previous_price is not None and self.previous_price != self.price

    def price_change_percentage(self) -> float:
        """Percent change relative to ``previous_price`` (0 when unknown or zero)."""
        if not self.previous_price:
            return 0.0
        return (self.price - self.previous_price) / self.previous_price * 100

    def without_previous_price(self) -> "Product":
        """Return a copy with the ephemeral ``previous_price`` cleared."""
        if self.previous_price is None:
            return self
        return replace(self, previous_price=None)

    def add_tag(self, tag: str) -> "Product":
        """Return a copy with ``tag`` appended if missing."""
        if tag in self.tags:
            return self
        return replace(self, tags=self.tags + (tag,))

    def remove_tag(self, tag: str) -> "Product":
        """Return a copy without ``tag``."""
        return replace(self, tags=tuple(t for t in self.tags if t != tag))

    def with_tags(self, tags: Iterable[str]) -> "Product":
        """Return a copy with the tag set replaced."""
        return replace(self, tags=_unique(tags))

    def add_custom_attribute(self, key: str, value: str) -> "Product":
        """Return a copy with a custom attribute set."""
        attributes = dict(self.custom_attributes)
        attributes[key] = value
        return replace(self, custom_attributes=attributes)

    def get_custom_attribute(self, key: str) -> Optional[str]:
        """Return a custom attribute value, or None."""
        return self.custom_attributes.get(key)

    def add_related_product(self, product_id: int) -> "Product":
        """Return a copy referencing a related product (no duplicates)."""
        if product_id in self.related_product_ids:
            return self
        return replace(self, related_product_ids=self.related_product_ids + (product_id,))

    def add_frequently_bought_with(self, product_id: int) -> "Product":
        """Return a copy referencing a co-purchased product (no duplicates)."""
        if product_id in self.frequently_bought_with_ids:
            return self
        return replace(
            self,
            frequently_bought_with_ids=self.frequently_bought_with_ids + (product_id,),
        )
